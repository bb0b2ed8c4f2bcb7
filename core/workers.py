import threading
from queue import Queue


class WorkerController:
    def __init__(self, ai_engine, db=None):
        self.ai_engine = ai_engine
        self.db = db

    def worker_propose_edit(self, current_file, request):
        try:
            proposal = self.ai_engine.propose_edit(current_file, request)
            if proposal.window is not None:
                return {
                    "type": "PROPOSAL_READY",
                    "data": {"file_id": current_file.id, "window": proposal.window, "reply": proposal.reply}
                }
            return {"type": "REPLY", "data": proposal.reply}
        except Exception as e:
            return {"type": "ERROR", "data": str(e)}

    def worker_save_script(self, name, window):
        try:
            script = self.db.save_script(name, window)
            return {"type": "SAVE_COMPLETE", "data": f'Saved "{script.name}" to local history.'}
        except Exception as e:
            return {"type": "ERROR", "data": str(e)}


class TaskQueue:
    """Runs slow work off the host thread; results are applied by `process_results`."""

    def __init__(self):
        self.task_queue = Queue()
        self.result_queue = Queue()
        self.worker_thread = threading.Thread(target=self._worker_loop, daemon=True)
        self.worker_thread.start()

    def _worker_loop(self):
        # A None task is the shutdown signal sent by stop().
        for task in iter(self.task_queue.get, None):
            func, args = task
            try:
                self.result_queue.put(func(*args))
            except Exception as e:
                self.result_queue.put({"type": "ERROR", "data": f"{getattr(func, '__name__', 'task')}: {e}"})
            finally:
                self.task_queue.task_done()
        self.task_queue.task_done()

    def stop(self, timeout=None):
        self.task_queue.put(None)
        self.worker_thread.join(timeout)

    def add_task(self, session, func, args):
        session.state.is_processing = True
        self.task_queue.put((func, args))

    def process_results(self, session):
        state = session.state
        while not self.result_queue.empty():
            result = self.result_queue.get()

            if result.get("type") == "ERROR":
                state.add_log(f"ERROR: {result['data']}", "error")
                state.is_processing = False
                continue

            msg_type = result.get("type")
            data = result.get("data")

            if msg_type == "PROPOSAL_READY":
                if session.apply_window(data["file_id"], data["window"]):
                    state.add_log(data["reply"], "success")
                state.chat_messages.append(("model", data["reply"]))
                state.is_processing = False

            elif msg_type == "REPLY":
                state.chat_messages.append(("model", data))
                state.is_processing = False

            elif msg_type == "SAVE_COMPLETE":
                state.add_log(data, "success")
                state.is_processing = False
