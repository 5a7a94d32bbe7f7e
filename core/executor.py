"""Runs an execution plan: one generation call per role, parallel or sequential."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

from config.defaults import DEFAULTS
from core.state import RoleResult


def _run_role(role, record, generator, logger):
    """Call one role and capture the outcome. Never raises."""
    start = time.perf_counter()
    try:
        text = generator.generate(role, record)
    except Exception as e:
        elapsed = int((time.perf_counter() - start) * 1000)
        logger.warning("Role %s failed after %d ms: %s", role.id, elapsed, e)
        return RoleResult(
            role_id=role.id,
            output_text="",
            elapsed_ms=elapsed,
            succeeded=False,
            error_detail=str(e) or type(e).__name__,
        )

    elapsed = int((time.perf_counter() - start) * 1000)
    logger.info("Role %s finished in %d ms", role.id, elapsed)
    return RoleResult(role_id=role.id, output_text=text, elapsed_ms=elapsed, succeeded=True)


def execute_plan(plan, record, generator, logger=None):
    """Execute every role of `plan` and return their results in plan order.

    Parallel mode waits for every role to settle; a failing role never
    cancels the others. Sequential mode keeps going after a failure.
    """
    logger = logger or logging.getLogger(__name__)
    logger.info("Executing %d roles (%s)", len(plan.roles), plan.mode)

    if plan.mode == "sequential":
        return [_run_role(role, record, generator, logger) for role in plan.roles]

    if not plan.roles:
        return []

    workers = min(DEFAULTS["max_parallel_roles"], len(plan.roles))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [
            pool.submit(_run_role, role, record, generator, logger)
            for role in plan.roles
        ]
        return [future.result() for future in futures]
