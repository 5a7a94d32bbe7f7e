"""Manager Agent - one conversation with the pipeline, clarification included."""

from core.orchestrator import Orchestrator
from core.scheduler import all_roles


class ManagerAgent:
    """Keeps the pending requirement record between a question and its answer."""

    def __init__(self, orchestrator=None):
        self.orchestrator = orchestrator or Orchestrator()
        self.pending = None

    def list_roles(self):
        """Return (id, display name, priority) tuples for every catalog role."""
        return [(r.id, r.display_name, r.priority) for r in all_roles()]

    @property
    def awaiting_answer(self):
        return self.pending is not None

    def handle(self, text, documents=None, mode=None):
        """Send one user turn through the pipeline.

        If the previous turn asked a question, `text` is taken as the answer.
        """
        if self.pending is not None:
            prior, self.pending = self.pending, None
            return self.orchestrator.process(text, prior=prior, mode=mode)

        response = self.orchestrator.process(text, documents=documents, mode=mode)
        if response.kind == "clarification":
            self.pending = response.requirements
        return response

    def reset(self):
        self.pending = None
