# --- FILE: engine/ai.py ---
import json
import os
from typing import Optional

from dotenv import load_dotenv
from openai import AzureOpenAI
from pydantic import BaseModel, ValidationError

from core.config import cfg
from core.models import EditorFile, Window

load_dotenv()

SYSTEM_PROMPT = """
You are an expert Roblox Lua Scripter and UI Designer.

TARGET CONTEXT:
File Name: {file_name}
Current UI JSON: {window_json}

CRITICAL RULES:
1. REAL LOGIC ONLY: Do NOT use comments like "-- insert logic here". Write the actual Roblox Lua code.
2. PERSISTENCE: Put the Lua code inside the "customLogic" field of the element.
3. UI UPDATES: Return JSON with a "folders" array to update the UI structure.
   Elements have "type" (Button, Toggle, Slider, Dropdown), "id", "text" and their own fields
   (Toggle: flag, defaultState; Slider: flag, min, max, value, decimals; Dropdown: flag, values).

If the user just asks a question, answer in text. If they ask for UI/Features, return JSON.
"""


class Proposal(BaseModel):
    reply: str
    window: Optional[Window] = None
    ai_generated: bool = True


def extract_window(text: str, current: Window) -> Optional[Window]:
    """Parses the outermost {...} of a reply and merges it over the current window."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        return None
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict) or not isinstance(data.get("folders"), list):
        return None
    try:
        return Window.model_validate({**current.model_dump(by_alias=True), **data})
    except ValidationError as e:
        print(f"AI Proposal Rejected: {e.error_count()} validation errors")
        return None


class LayoutAI:
    def __init__(self):
        self.api_key = os.getenv("AZURE_OPENAI_API_KEY", "")
        self.endpoint = os.getenv("AZURE_OPENAI_ENDPOINT", "")
        self.api_version = os.getenv("AZURE_OPENAI_API_VERSION", "2024-02-15-preview")
        self.deployment = os.getenv("AZURE_OPENAI_DEPLOYMENT", cfg.get("ai_deployment"))

        self.client = None
        self._init_client()

    def _init_client(self):
        """Builds the Azure client bound to the configured deployment, or leaves the assistant offline."""
        self.client = None
        if not (self.api_key and self.endpoint):
            return
        try:
            self.client = AzureOpenAI(
                api_key=self.api_key,
                api_version=self.api_version,
                azure_endpoint=self.endpoint,
                azure_deployment=self.deployment,
            )
            print(f"AI Client Initialized ({self.deployment}).")
        except Exception as e:
            print(f"AI Connection Failed: {e}")

    def configure_client(self, key, endpoint, deployment=None):
        """Swaps credentials (and optionally the deployment) at runtime."""
        self.api_key = key
        self.endpoint = endpoint
        if deployment:
            self.deployment = deployment
        self._init_client()
        return self.client is not None

    def propose_edit(self, current_file: EditorFile, request: str) -> Proposal:
        if not self.client:
            return Proposal(reply="AI Offline. Configure Azure OpenAI credentials to use the assistant.",
                            ai_generated=False)

        prompt = SYSTEM_PROMPT.format(
            file_name=current_file.name,
            window_json=current_file.data.model_dump_json(by_alias=True),
        )
        try:
            response = self.client.chat.completions.create(
                model=self.deployment,
                messages=[
                    {"role": "system", "content": prompt},
                    {"role": "user", "content": request}
                ]
            )
            text = response.choices[0].message.content or "I couldn't generate a response."
        except Exception as e:
            return Proposal(reply=f"AI Error: {e}", ai_generated=False)

        window = extract_window(text, current_file.data)
        if window is not None:
            return Proposal(reply=f'I\'ve updated "{current_file.name}" with real working logic!', window=window)
        return Proposal(reply=text)
