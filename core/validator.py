from typing import List, Optional

from pydantic import BaseModel

from core.models import Window, element_flag


class Issue(BaseModel):
    message: str
    element_id: Optional[str] = None


class AnalysisReport(BaseModel):
    issues: List[Issue]

    @property
    def passed(self) -> bool:
        return not self.issues


def analyze_window(window: Window) -> AnalysisReport:
    """Advisory checks only: duplicate flags, blank labels, unbalanced parentheses."""
    flags = set()
    issues = []

    for folder in window.folders:
        for el in folder.elements:
            flag = element_flag(el)
            if flag:
                if flag in flags:
                    issues.append(Issue(message=f'Duplicate flag detected: "{flag}" in element "{el.text}"',
                                        element_id=el.id))
                else:
                    flags.add(flag)
            if not el.text or not el.text.strip():
                issues.append(Issue(message=f'Element inside "{folder.text}" has no display text.',
                                    element_id=el.id))
            if el.custom_logic and el.custom_logic.count("(") != el.custom_logic.count(")"):
                issues.append(Issue(message=f'Mismatched parentheses in "{el.text}" logic.',
                                    element_id=el.id))

    return AnalysisReport(issues=issues)
