"""Collaboration log — discussion threads opened when a finding is escalated."""

import logging
import threading
import time
import uuid

from core.errors import SessionClosedError
from core.state import CollaborationMessage, CollaborationSession

MESSAGE_KINDS = ("discussion", "patch-proposal", "validation", "escalation")


def _new_id(prefix):
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


class CollaborationLog:
    """Owns every collaboration session and the flat message history."""

    def __init__(self, logger=None, clock=time.time):
        self.logger = logger or logging.getLogger(__name__)
        self._clock = clock
        self._sessions = {}
        self._history = []
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def start_session(self, issue, lead, participants=()):
        """Open a session about `issue`, led by `lead`, with an opening message."""
        members = [lead] + [p for p in participants if p != lead]
        session = CollaborationSession(
            id=_new_id("session"),
            participants=members,
            started_at=self._clock(),
        )
        with self._lock:
            self._sessions[session.id] = session

        self.logger.info("Collaboration session %s opened (%d participants)", session.id, len(members))
        self.post(
            session.id, lead, "all", "discussion",
            f'{issue.severity.capitalize()} issue found by {issue.origin_role_id}: "{issue.description}"',
            priority=issue.severity, issue=issue,
        )
        return session

    def get(self, session_id) -> CollaborationSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Collaboration session {session_id} not found")
        return session

    def sessions(self):
        with self._lock:
            return list(self._sessions.values())

    def history(self):
        with self._lock:
            return list(self._history)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def post(self, session_id, sender, recipient, kind, content, priority="medium",
             issue=None, before=None, after=None):
        if kind not in MESSAGE_KINDS:
            raise ValueError(f"Unknown message kind: {kind}")

        session = self.get(session_id)
        message = CollaborationMessage(
            id=_new_id("msg"),
            sender=sender,
            recipient=recipient,
            kind=kind,
            content=content,
            timestamp=self._clock(),
            priority=priority,
            issue=issue,
            before=before,
            after=after,
        )
        with self._lock:
            if session.resolved:
                raise SessionClosedError(f"Session {session_id} is resolved")
            session.messages.append(message)
            self._history.append(message)

        self.logger.debug("[%s] %s -> %s (%s): %s", session_id, sender, recipient, kind, content)
        return message

    def propose_patch(self, session_id, role_id, issue, before, after):
        return self.post(
            session_id, role_id, "lead", "patch-proposal",
            f"Proposed fix for: {issue.description}",
            priority=issue.severity, issue=issue, before=before, after=after,
        )

    def validate_patch(self, session_id, validator, patch_message, approved, reason=None):
        if approved:
            content = f"Patch approved: {reason or 'fix is appropriate'}"
        else:
            content = f"Patch rejected: {reason or 'fix is insufficient'}"
        return self.post(
            session_id, validator, patch_message.sender, "validation", content,
            priority=patch_message.priority, issue=patch_message.issue,
        )

    def escalate(self, session_id, sender, recipient, reason, issue=None):
        session = self.get(session_id)
        with self._lock:
            if recipient not in session.participants:
                session.participants.append(recipient)
        self.logger.warning("Escalation in %s: %s -> %s", session_id, sender, recipient)
        return self.post(
            session_id, sender, recipient, "escalation",
            f"Escalation needed: {reason}", priority="critical", issue=issue,
        )

    def resolve(self, session_id, lead, decision):
        """Post the final decision and close the session."""
        self.post(session_id, lead, "all", "discussion", f"Final decision: {decision}", priority="high")
        session = self.get(session_id)
        with self._lock:
            session.resolved = True
            session.ended_at = self._clock()
            session.final_decision = decision

        self.logger.info(
            "Collaboration session %s resolved in %.2fs (%d messages)",
            session_id, session.ended_at - session.started_at, len(session.messages),
        )
        return session

    # ------------------------------------------------------------------
    # Housekeeping and reporting
    # ------------------------------------------------------------------

    def cleanup(self, max_age):
        """Drop resolved sessions that ended more than `max_age` seconds ago.

        Unresolved sessions are kept however old they are. Returns the number
        of sessions dropped.
        """
        cutoff = self._clock() - max_age
        with self._lock:
            stale = [
                sid for sid, s in self._sessions.items()
                if s.resolved and s.ended_at is not None and s.ended_at < cutoff
            ]
            for sid in stale:
                del self._sessions[sid]
        if stale:
            self.logger.info("Dropped %d resolved collaboration sessions", len(stale))
        return len(stale)

    def summary(self, session_id):
        try:
            session = self.get(session_id)
        except KeyError:
            return "Session not found"

        end = session.ended_at if session.ended_at is not None else self._clock()
        lines = [
            "Collaboration summary",
            "",
            f"Session: {session.id}",
            f"Participants: {', '.join(session.participants)}",
            f"Duration: {end - session.started_at:.2f}s",
            f"Messages: {len(session.messages)}",
            f"Status: {'resolved' if session.resolved else 'open'}",
        ]
        if session.final_decision:
            lines.append(f"Final decision: {session.final_decision}")
        lines.append("")
        lines.append("Messages:")
        for idx, msg in enumerate(session.messages, 1):
            lines.append(f"{idx}. [{msg.kind}] {msg.sender} -> {msg.recipient}: {msg.content}")
        return "\n".join(lines)

    def statistics(self):
        with self._lock:
            sessions = list(self._sessions.values())
            history = list(self._history)

        resolved = [s for s in sessions if s.resolved]
        durations = [s.ended_at - s.started_at for s in resolved]
        return {
            "total_sessions": len(sessions),
            "resolved_sessions": len(resolved),
            "active_sessions": len(sessions) - len(resolved),
            "total_messages": len(history),
            "messages_by_kind": {k: sum(1 for m in history if m.kind == k) for k in MESSAGE_KINDS},
            "average_resolution_seconds": sum(durations) / len(durations) if durations else 0.0,
        }
