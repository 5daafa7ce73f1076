"""AMP Validator — runs the official amphtml-validator CLI as an asyncio subprocess.

Invariants:
    - HTML is fed on stdin ("-" input); results read from --format=json stdout
    - Every run bounded by timeout_seconds; the subprocess is killed on
      timeout or cancellation, never left orphaned
    - All failures (missing executable, crash, unparseable output) raised as
      ValidatorError (core/errors.py)
    - Exit status 1 alone is not a failure: the CLI exits 1 for FAIL verdicts

Design Decisions:
    - CLI over an embedded JS engine: the ruleset ships with the npm tool and
      stays current without redeploying this service
    - get_instance() resolves the executable up front so a missing install is
      reported as an initialization failure, before any HTML is sent
"""

import asyncio
import json
import logging
import shutil
from functools import partial

from pydantic import ValidationError

from ampcheck.config import Settings
from ampcheck.core.errors import ValidatorError
from ampcheck.core.validator_protocols import ValidatorFactory
from ampcheck.schemas.verdict import AmpTestResult

logger = logging.getLogger(__name__)

_STDERR_SNIPPET = 500


def parse_validator_output(stdout: bytes, stderr: bytes = b"") -> AmpTestResult:
    """Parse `amphtml-validator --format=json` output for a single input."""
    text = stdout.decode("utf-8", errors="replace").strip()
    if not text:
        detail = stderr.decode("utf-8", errors="replace").strip()
        raise ValidatorError(
            f"no output from validator: {detail[:_STDERR_SNIPPET] or 'empty'}",
        )
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidatorError(f"unparseable validator output: {e}") from e

    if not isinstance(payload, dict) or len(payload) != 1:
        raise ValidatorError("expected exactly one result in validator output")
    (result,) = payload.values()
    try:
        return AmpTestResult.model_validate(result)
    except ValidationError as e:
        raise ValidatorError(f"malformed validator result: {e}") from e


def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass


class CliAmpValidator:
    """AmpValidator backed by the amphtml-validator command line tool."""

    def __init__(
        self,
        executable: str,
        validator_js: str | None = None,
        timeout_seconds: float = 30.0,
    ):
        self.executable = executable
        self.validator_js = validator_js
        self.timeout_seconds = timeout_seconds

    def command(self) -> list[str]:
        args = [self.executable, "--format=json"]
        if self.validator_js:
            args.append(f"--validator_js={self.validator_js}")
        args.append("-")
        return args

    async def validate_string(self, html: str) -> AmpTestResult:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command(),
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ValidatorError(f"could not start {self.executable}: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(html.encode("utf-8")),
                timeout=self.timeout_seconds,
            )
        except asyncio.TimeoutError:
            _kill(proc)
            await proc.wait()
            raise ValidatorError(
                f"no result within {self.timeout_seconds}s",
            )
        except asyncio.CancelledError:
            _kill(proc)
            await asyncio.shield(proc.wait())
            raise

        result = parse_validator_output(stdout, stderr)
        logger.debug(
            f"Validator exited {proc.returncode} with {result.status}",
            extra={
                "validator_status": result.status,
                "error_count": len(result.errors),
            },
        )
        return result


def resolve_executable(executable: str) -> str | None:
    return shutil.which(executable)


async def get_instance(settings: Settings) -> CliAmpValidator:
    """Initialize a validator from settings, failing fast when not installed."""
    path = resolve_executable(settings.validator_executable)
    if path is None:
        raise ValidatorError(
            f"executable '{settings.validator_executable}' not found on PATH",
        )
    return CliAmpValidator(
        path,
        validator_js=settings.validator_js,
        timeout_seconds=settings.validator_timeout_seconds,
    )


def make_validator_factory(settings: Settings) -> ValidatorFactory:
    return partial(get_instance, settings)
