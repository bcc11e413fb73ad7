"""Dispatch one request: validate, authorize, resolve, merge, execute.

The dispatcher is a transparent gate. Once a request passes the checks the
action script inherits stdio, runs to completion without a timeout, and its
exit status becomes the dispatcher's own.
"""

import errno
import logging
import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from broker.arguments import merge
from broker.bundles import require_executable, resolve, script_path
from broker.config import Settings, get_settings
from broker.errors import BrokerError, ScriptUnavailable
from broker.ids import new_id
from broker.logging import bind_context
from broker.policy.engine import require_allowed
from broker.store.access import AccessConfig, parse_access
from broker.store.defaults import parse_defaults
from broker.validation import validate_invocation

logger = logging.getLogger(__name__)

SHELL = "/bin/sh"


@dataclass(frozen=True, slots=True)
class DispatchRequest:
    user: str
    bundle: str
    action: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class DispatchPlan:
    request: DispatchRequest
    bundle_dir: Path
    script: Path
    argv: list[str]
    env: dict[str, str] = field(default_factory=dict)
    dispatch_id: str = ""


def _child_env(
    settings: Settings, request: DispatchRequest, bundle_dir: Path, dispatch_id: str
) -> dict[str, str]:
    env = dict(os.environ)
    env.update(settings.child_env())
    env.update(
        {
            "BROKER_USER": request.user,
            "BROKER_PWD": str(bundle_dir),
            "BROKER_BUNDLE": request.bundle,
            "BROKER_ACTION": request.action,
            "BROKER_DISPATCH_ID": dispatch_id,
        }
    )
    return env


def exit_status(returncode: int) -> int:
    """Map a child return code to a process exit status (signal N -> 128+N)."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def prepare(
    request: DispatchRequest,
    settings: Settings,
    access: AccessConfig | None = None,
) -> DispatchPlan:
    """Run every check that precedes execution and build the child invocation.

    Raises UsageError, PermissionDenied or ScriptUnavailable.
    """
    validate_invocation(request.user, request.bundle, request.action, request.args)

    if access is None:
        access = parse_access(settings.access_path)
    require_allowed(access, request.user, request.bundle, request.action)

    bundle_dir = resolve(settings.bundles_path, request.bundle)
    script = require_executable(script_path(bundle_dir, request.action, settings.script_ext))

    defaults = parse_defaults(settings.defaults_path)
    argv = merge(request.args, defaults.args_for(request.bundle, request.action))

    dispatch_id = new_id("dsp")
    return DispatchPlan(
        request=request,
        bundle_dir=bundle_dir,
        script=script,
        argv=argv,
        env=_child_env(settings, request, bundle_dir, dispatch_id),
        dispatch_id=dispatch_id,
    )


def execute(plan: DispatchPlan) -> int:
    logger.info("Executing %s with %d argument(s)", plan.script, len(plan.argv))
    command = [str(plan.script), *plan.argv]
    try:
        try:
            proc = subprocess.run(command, env=plan.env, check=False)
        except OSError as exc:
            if exc.errno != errno.ENOEXEC:
                raise
            # No interpreter line: run it with sh, as a POSIX shell would.
            proc = subprocess.run([SHELL, *command], env=plan.env, check=False)
    except OSError as exc:
        raise ScriptUnavailable(
            str(plan.script), f"could not be executed ({exc.strerror or exc})"
        ) from exc
    status = exit_status(proc.returncode)
    logger.info("Script %s exited with status %d", plan.script, status)
    return status


def dispatch(
    user: str,
    bundle: str,
    action: str,
    args: Sequence[str] = (),
    *,
    settings: Settings | None = None,
) -> int:
    """Dispatch `bundle/action` for `user` and return the child's exit status."""
    settings = settings or get_settings()
    request = DispatchRequest(user=user, bundle=bundle, action=action, args=tuple(args))
    bind_context(user=user, bundle=bundle, action=action)
    try:
        plan = prepare(request, settings)
    except BrokerError as exc:
        logger.warning("Dispatch refused: %s", exc)
        raise
    bind_context(dispatch_id=plan.dispatch_id)
    return execute(plan)
