"""Main pipeline orchestrator: request → clarification → generation → artifact."""

import logging
import threading
from collections import deque

from agents.generator import GeneratorAgent
from agents.issue_detector import IssueDetector
from agents.patch_composer import PatchComposer
from config.defaults import DEFAULTS
from core.collaboration import CollaborationLog
from core.errors import TransportError, ValidationError
from core.executor import execute_plan
from core.merger import merge_results
from core.quality import validate_artifact
from core.scheduler import create_plan
from core.state import Intent, PipelineResponse
from manager.classifier import (
    detect_intent,
    expects_multi_file,
    extract_requirements,
    is_simple_request,
)
from manager.clarifier import decide, resolve_answer
from utils.extractor import extract_artifact

MODES = ("auto", "fast", "merge")

LEAD_ROLE = "architect"

_SEVERITY_RANK = {"critical": 0, "high": 1, "medium": 2, "low": 3}

HISTORY_SIZE = 50


def validate_request(text):
    """Reject empty or over-long requests before anything is generated."""
    if text is None or not text.strip():
        raise ValidationError("Request is empty")
    limit = DEFAULTS["max_request_chars"]
    if len(text) > limit:
        raise ValidationError(f"Request is too long ({len(text)} characters, max {limit})")


class Orchestrator:
    """Runs the full pipeline for one request or one clarification answer.

    Clarification: a create request missing key details gets ONE composed
    question message. The caller keeps the returned record and passes it back
    as `prior` with the user's reply; the reply always leads to generation.
    """

    def __init__(self, generator=None, logger=None, collaboration=None):
        self.logger = logger or logging.getLogger(__name__)
        self.generator = generator or GeneratorAgent()
        self.collaboration = collaboration or CollaborationLog(logger=self.logger)
        self.detector = IssueDetector(logger=self.logger)
        self.patch_composer = PatchComposer(collaboration=self.collaboration)
        self._history = deque(maxlen=HISTORY_SIZE)
        self._history_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def process(self, text, documents=None, prior=None, mode=None) -> PipelineResponse:
        validate_request(text)

        if prior is not None:
            # Clarification answer: fold it in and generate, no second round
            record = resolve_answer(text, prior)
            request = prior.source_text or text
            intent = detect_intent(request)
            self.logger.info("Clarification answer applied (app_type=%s)", record.app_type)
            return self.generate(record, request, mode=mode, intent=intent)

        record = extract_requirements(text, documents)
        intent = detect_intent(text)
        self.logger.info(
            "Intent %s (%.1f), app_type=%s, features=%s, complexity=%s",
            intent.kind, intent.confidence, record.app_type,
            sorted(record.features), record.complexity,
        )

        if intent.kind == "question" and intent.confidence > 0:
            return self._answer(text, record, intent)

        decision = decide(intent, record)
        if decision.needs_clarification:
            intent.needs_clarification = True
            intent.questions = decision.questions
            self.logger.info("Asking for clarification on %s", ", ".join(decision.pending))
            return PipelineResponse(
                kind="clarification",
                message=decision.questions[0],
                requirements=record,
                intent=intent,
                suggested_defaults=decision.suggested_defaults,
            )

        return self.generate(record, text, mode=mode, intent=intent)

    def plan(self, text) -> PipelineResponse:
        """Dry run: requirements and execution plan, no generation call."""
        validate_request(text)
        record = extract_requirements(text)
        plan = create_plan(record)
        roles = ", ".join(r.id for r in plan.roles)
        return PipelineResponse(
            kind="plan",
            message=f"{len(plan.roles)} roles ({plan.mode}, ~{plan.estimated_duration_seconds}s): {roles}",
            requirements=record,
            intent=detect_intent(text),
            plan=plan,
        )

    def generate(self, record, request, mode=None, intent=None) -> PipelineResponse:
        """Generate an artifact for a generation-ready record."""
        mode = mode or DEFAULTS["generation_mode"]
        if mode not in MODES:
            raise ValidationError(f"Unknown generation mode '{mode}', expected one of {', '.join(MODES)}")

        record.freeze()
        self.collaboration.cleanup(DEFAULTS["session_max_age"])

        use_fast = mode == "fast" or (mode == "auto" and is_simple_request(request, record))

        if use_fast:
            try:
                response = self._generate_fast(record, request, intent)
            except TransportError as e:
                self.logger.warning("Single-shot generation failed, falling back to roles: %s", e)
            else:
                self._remember(request, response)
                return response

        response = self._generate_merged(record, request, intent)
        self._remember(request, response)
        return response

    # ------------------------------------------------------------------
    # Generation paths
    # ------------------------------------------------------------------

    def _answer(self, text, record, intent):
        reply = self.generator.answer(text)
        return PipelineResponse(kind="answer", message=reply, requirements=record, intent=intent)

    def _generate_fast(self, record, request, intent):
        raw = self.generator.generate_single(request, record, expects_multi_file(request))
        artifact = extract_artifact(raw, request, logger=self.logger)
        validation = validate_artifact(artifact)
        return PipelineResponse(
            kind="artifact",
            message=self._describe(artifact),
            requirements=record,
            intent=intent,
            artifact=artifact,
            validation=validation,
        )

    def _generate_merged(self, record, request, intent):
        plan = create_plan(record)
        self.logger.info(
            "Plan: %d roles, %s, ~%ds", len(plan.roles), plan.mode, plan.estimated_duration_seconds,
        )

        results = execute_plan(plan, record, self.generator, logger=self.logger)
        if not any(r.succeeded for r in results):
            raise TransportError("Every role failed, nothing was generated", results=results)

        self.review(results)
        artifact = merge_results(results, record)
        return PipelineResponse(
            kind="artifact",
            message=self._describe(artifact, results),
            requirements=record,
            intent=intent,
            artifact=artifact,
            plan=plan,
            role_results=results,
            validation=validate_artifact(artifact),
        )

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    def review(self, results):
        """Scan every succeeded role output, auto-fix, and log collaboration.

        Diagnostic only: a failure here is logged and the results are
        delivered as they are.
        """
        for result in results:
            if not result.succeeded:
                continue
            try:
                self._review_one(result)
            except Exception:
                self.logger.exception("Review of role %s failed", result.role_id)

    def _review_one(self, result):
        detection = self.detector.detect(result.output_text, result.role_id)
        result.issues = detection.issues
        if not detection.issues:
            return

        worst = min(detection.issues, key=lambda i: _SEVERITY_RANK.get(i.severity, 9))
        session = self.collaboration.start_session(worst, LEAD_ROLE, [result.role_id])
        result.session_id = session.id

        fixed = []
        if DEFAULTS["auto_fix"]:
            result.output_text, fixed = self.patch_composer.apply(
                result.output_text, detection.issues, session, result.role_id,
            )
            for message in list(session.messages):
                if message.kind == "patch-proposal":
                    self.collaboration.validate_patch(session.id, LEAD_ROLE, message, approved=True)

        remaining = [i for i in detection.issues if i not in fixed]
        if not remaining:
            self.collaboration.resolve(
                session.id, LEAD_ROLE, f"{len(fixed)} finding(s) fixed automatically",
            )
            return

        self.collaboration.escalate(
            session.id, result.role_id, "lead",
            f"{len(remaining)} finding(s) need manual review "
            f"(confidence {detection.confidence})",
            issue=remaining[0],
        )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def _describe(self, artifact, results=None):
        if artifact.kind == "multi":
            text = f"Generated project '{artifact.name}' with {len(artifact.files)} files"
            if artifact.salvaged:
                text += " (recovered from a malformed response, please review)"
            return text
        if results is None:
            return "Generated a single-document application"
        ok = sum(1 for r in results if r.succeeded)
        return f"Generated a single-document application from {ok}/{len(results)} roles"

    def _remember(self, request, response):
        entry = {
            "request": request[:200],
            "kind": response.artifact.kind if response.artifact else response.kind,
            "message": response.message,
            "roles": [
                {"id": r.role_id, "succeeded": r.succeeded, "elapsed_ms": r.elapsed_ms}
                for r in response.role_results
            ],
        }
        with self._history_lock:
            self._history.append(entry)

    def history(self):
        with self._history_lock:
            return list(self._history)
