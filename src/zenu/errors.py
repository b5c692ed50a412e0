"""Error taxonomy shared by the pipeline, the stores and the teleprompter."""

from __future__ import annotations


class ZenuError(Exception):
    """Base class for every error raised by this package."""

    http_status = 500


class ItemProcessingError(ZenuError):
    """A single news item failed inside a stage. Always recovered locally."""

    def __init__(self, item_id: str, stage: str, message: str = "") -> None:
        self.item_id = item_id
        self.stage = stage
        super().__init__(message or f"{stage} failed for item {item_id}")


class StageInputError(ZenuError):
    """Missing or malformed input to a stage. Terminal for the pipeline run."""

    http_status = 400

    def __init__(self, message: str, *, http_status: int = 400) -> None:
        self.http_status = http_status
        super().__init__(message)


class ExternalServiceError(ZenuError):
    """The LLM or a news backend was unreachable, timed out or errored."""

    http_status = 502


class PlaybackError(ZenuError):
    """The teleprompter cannot act on its current render state."""


class ScriptNotFoundError(ZenuError):
    http_status = 404

    def __init__(self, script_id: str) -> None:
        self.script_id = script_id
        super().__init__(f"Script not found: {script_id}")


class ScriptAccessError(ZenuError):
    http_status = 403

    def __init__(self, script_id: str, requester_id: str) -> None:
        self.script_id = script_id
        self.requester_id = requester_id
        super().__init__(f"User {requester_id} may not access script {script_id}")
