#!/usr/bin/env python3
"""CodeCraft - HTTP API for the generation pipeline."""

import logging
import os
import threading
import time
import uuid

from flask import Flask, jsonify, request

from config.defaults import DEFAULTS
from core.errors import PipelineError, TransportError, ValidationError
from core.orchestrator import Orchestrator, validate_request
from core.scheduler import all_roles
from core.state import AttachedDocument
from utils.extractor import extract_artifact

logger = logging.getLogger("codecraft")

app = Flask(__name__)
orchestrator = Orchestrator(logger=logger)

# Requirement records waiting for a clarification answer: {id: {"record": ..., "created": ts}}
_jobs = {}
_jobs_lock = threading.Lock()
_MAX_JOBS = 50  # prevent unbounded memory growth
_JOB_TTL = DEFAULTS["session_max_age"]


def _cleanup_jobs():
    """Remove expired jobs. Called under _jobs_lock."""
    now = time.time()
    expired = [jid for jid, job in _jobs.items() if now - job["created"] > _JOB_TTL]
    for jid in expired:
        del _jobs[jid]
    # If still over limit, remove oldest
    if len(_jobs) > _MAX_JOBS:
        by_age = sorted(_jobs.items(), key=lambda x: x[1]["created"])
        for jid, _ in by_age[:len(_jobs) - _MAX_JOBS]:
            del _jobs[jid]


def _store_job(record):
    """Store a pending record and return its ID."""
    job_id = str(uuid.uuid4())[:8]
    with _jobs_lock:
        _cleanup_jobs()
        _jobs[job_id] = {"record": record, "created": time.time()}
    return job_id


def _take_job(job_id):
    """Remove and return the pending record for a job, or None if not found/expired."""
    with _jobs_lock:
        job = _jobs.pop(job_id, None)
    if not job or time.time() - job["created"] > _JOB_TTL:
        return None
    return job["record"]


def _restore_job(job_id, record):
    """Put a taken record back under its id so the answer can be retried."""
    with _jobs_lock:
        _jobs[job_id] = {"record": record, "created": time.time()}


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

def _record_to_dict(record):
    return {
        "app_type": record.app_type,
        "design": record.design,
        "features": sorted(record.features),
        "stack": list(record.stack),
        "database": record.database,
        "database_product": record.database_product,
        "authentication": record.authentication,
        "payment_provider": record.payment_provider,
        "target": record.target,
        "complexity": record.complexity,
        "documents": [d.name for d in record.documents],
    }


def _artifact_to_dict(artifact):
    if artifact.kind == "single":
        return {"kind": "single", "content": artifact.content}
    return {
        "kind": "multi",
        "name": artifact.name,
        "entry_file": artifact.entry_file,
        "setup_notes": artifact.setup_notes,
        "salvaged": artifact.salvaged,
        "files": [
            {"path": f.path, "content": f.content, "language": f.language}
            for f in artifact.files
        ],
    }


def _plan_to_dict(plan):
    return {
        "mode": plan.mode,
        "estimated_duration_seconds": plan.estimated_duration_seconds,
        "roles": [{"id": r.id, "name": r.display_name, "priority": r.priority} for r in plan.roles],
    }


def _result_to_dict(result):
    return {
        "role_id": result.role_id,
        "succeeded": result.succeeded,
        "elapsed_ms": result.elapsed_ms,
        "error": result.error_detail,
        "session_id": result.session_id,
        "issues": [
            {
                "id": i.id,
                "severity": i.severity,
                "category": i.category,
                "description": i.description,
                "suggested_fix": i.suggested_fix,
                "auto_fixable": i.auto_fixable,
            }
            for i in result.issues
        ],
    }


def _response_to_dict(response):
    result = {"kind": response.kind, "message": response.message}
    if response.requirements is not None:
        result["requirements"] = _record_to_dict(response.requirements)
    if response.intent is not None:
        result["intent"] = {"kind": response.intent.kind, "confidence": response.intent.confidence}
    if response.suggested_defaults:
        result["suggested_defaults"] = response.suggested_defaults
    if response.artifact is not None:
        result["artifact"] = _artifact_to_dict(response.artifact)
    if response.plan is not None:
        result["plan"] = _plan_to_dict(response.plan)
    if response.role_results:
        result["roles"] = [_result_to_dict(r) for r in response.role_results]
    if response.validation is not None:
        result["validation"] = {
            "is_valid": response.validation.is_valid,
            "errors": response.validation.errors,
            "warnings": response.validation.warnings,
        }
    return result


def _documents_from(data):
    documents = []
    for item in data.get("documents") or []:
        if not isinstance(item, dict):
            raise ValidationError("Each document must be an object")
        documents.append(AttachedDocument(
            name=str(item.get("name", "document")),
            mime=str(item.get("mime", "text/plain")),
            text_content=str(item.get("text", "")),
        ))
    return documents


def _respond(response):
    result = _response_to_dict(response)
    if response.kind == "clarification":
        result["job_id"] = _store_job(response.requirements)
    return jsonify(result)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

@app.errorhandler(ValidationError)
def handle_validation_error(e):
    return jsonify({"error": str(e)}), 400


@app.errorhandler(TransportError)
def handle_transport_error(e):
    logger.error("Generation failed: %s", e)
    return jsonify({
        "error": str(e),
        "roles": [_result_to_dict(r) for r in e.results],
    }), 502


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@app.route("/api/roles")
def api_roles():
    return jsonify([
        {"id": r.id, "name": r.display_name, "priority": r.priority}
        for r in all_roles()
    ])


@app.route("/api/generate", methods=["POST"])
def api_generate():
    """Run one request. May answer with a clarification question and a job_id."""
    data = request.get_json(silent=True)
    if not data or not str(data.get("request", "")).strip():
        return jsonify({"error": "Missing request"}), 400

    response = orchestrator.process(
        data["request"].strip(),
        documents=_documents_from(data),
        mode=data.get("mode"),
    )
    return _respond(response)


@app.route("/api/clarify", methods=["POST"])
def api_clarify():
    """Answer a pending clarification question; always generates."""
    data = request.get_json(silent=True) or {}
    job_id = data.get("job_id")
    if not job_id:
        return jsonify({"error": "Missing job_id"}), 400

    answer = str(data.get("answer", "")).strip()
    validate_request(answer)

    record = _take_job(job_id)
    if record is None:
        return jsonify({"error": "Job not found or expired"}), 404

    try:
        response = orchestrator.process(answer, prior=record, mode=data.get("mode"))
    except PipelineError:
        _restore_job(job_id, record)
        raise
    return _respond(response)


@app.route("/api/plan", methods=["POST"])
def api_plan():
    data = request.get_json(silent=True)
    if not data or not str(data.get("request", "")).strip():
        return jsonify({"error": "Missing request"}), 400
    return jsonify(_response_to_dict(orchestrator.plan(data["request"].strip())))


@app.route("/api/extract", methods=["POST"])
def api_extract():
    """Classify a raw generation response without calling the model."""
    data = request.get_json(silent=True) or {}
    if "response" not in data:
        return jsonify({"error": "Missing response"}), 400
    artifact = extract_artifact(str(data["response"]), str(data.get("request", "")), logger=logger)
    return jsonify(_artifact_to_dict(artifact))


@app.route("/api/sessions")
def api_sessions():
    collaboration = orchestrator.collaboration
    sessions = [
        {
            "id": s.id,
            "participants": s.participants,
            "resolved": s.resolved,
            "messages": len(s.messages),
            "final_decision": s.final_decision,
        }
        for s in collaboration.sessions()
    ]
    return jsonify({
        "sessions": sessions,
        "statistics": collaboration.statistics(),
        "issues": orchestrator.detector.statistics(),
    })


@app.route("/api/sessions/<session_id>")
def api_session_summary(session_id):
    try:
        collaboration = orchestrator.collaboration
        collaboration.get(session_id)
    except KeyError:
        return jsonify({"error": "Session not found"}), 404
    return jsonify({"id": session_id, "summary": collaboration.summary(session_id)})


@app.route("/api/history")
def api_history():
    return jsonify(orchestrator.history())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    port = int(os.environ.get("PORT", 5001))
    logger.info("CodeCraft API running at http://localhost:%d", port)
    app.run(debug=False, port=port, threaded=True)
