"""Patch composer — applies rule auto-fixes to a role's output. Zero LLM calls."""

from config.rules import GENERIC_RULES, ROLE_RULES


def _fixes_for(role_id):
    """description -> (fix_from, fix_to) for the auto-fixable rules of a role."""
    rules = ROLE_RULES.get(role_id, GENERIC_RULES)
    return {
        description: (fix_from, fix_to)
        for _, _, _, _, description, _, fix_from, fix_to in rules
        if fix_from is not None and fix_to is not None
    }


def _excerpt(text, fix_from, fix_to):
    """The first affected line, before and after the substitution."""
    match = fix_from.search(text)
    start = text.rfind("\n", 0, match.start()) + 1
    end = text.find("\n", match.start())
    if end == -1:
        end = len(text)
    before = text[start:end]
    return before, fix_from.sub(fix_to, before)


class PatchComposer:
    """Applies the substitutions of auto-fixable findings, in finding order."""

    name = "patch_composer"

    def __init__(self, collaboration=None):
        self.collaboration = collaboration

    def apply(self, text, issues, session=None, role_id=None):
        """Return (patched_text, fixed_issues).

        A finding counts as fixed only if its substitution changed the text.
        Each fix is recorded as a patch-proposal in `session` when given.
        """
        fixable = [i for i in issues if i.auto_fixable]
        if not fixable:
            return text, []

        fixed = []
        for issue in fixable:
            fixes = _fixes_for(role_id or issue.origin_role_id)
            fix = fixes.get(issue.description)
            if fix is None:
                continue
            fix_from, fix_to = fix
            if not fix_from.search(text):
                continue

            before, after = _excerpt(text, fix_from, fix_to)
            patched = fix_from.sub(fix_to, text)
            if patched == text:
                continue
            text = patched
            fixed.append(issue)

            if session is not None and self.collaboration is not None:
                self.collaboration.propose_patch(
                    session.id, role_id or issue.origin_role_id, issue, before, after,
                )
        return text, fixed
