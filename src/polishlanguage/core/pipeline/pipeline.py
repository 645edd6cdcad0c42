"""
End-to-end polish/translate run for one hotkey trigger.

capture selection -> load settings -> call provider -> clipboard, sound,
notification. Every transformation-path error is caught here and turned into
a log record plus, when enabled, a failure notification.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ...utils.logger import get_logger
from ..errors import MissingCredentialError, TransformError
from ..providers import ProviderAdapter, get_adapter
from ..settings import Settings
from .guard import InvocationGuard
from .operations import OperationKind, get_instruction, get_profile, make_preview

logger = get_logger(__name__)


class OutcomeStatus(Enum):
    SUCCESS = "success"
    SKIPPED = "skipped"  # nothing selected
    FAILED = "failed"
    REJECTED = "rejected"  # guard refused an overlapping run


@dataclass
class TransformOutcome:
    kind: OperationKind
    status: OutcomeStatus
    text: Optional[str] = None
    error: Optional[Exception] = None


class TransformPipeline:
    """
    Runs one operation against injected collaborators.

    Collaborators:
        capture_selected_text: returns the selection, raises CaptureError
        write_clipboard: places text on the clipboard, raises ClipboardError
        show_notification: (title, body)
        play_completion_sound: no arguments

    Settings are loaded fresh for every run, so each run keeps the snapshot
    it started with even if the file changes while the request is in flight.
    """

    def __init__(
        self,
        capture_selected_text: Callable[[], str],
        write_clipboard: Callable[[str], None],
        show_notification: Callable[[str, str], None],
        play_completion_sound: Callable[[], None],
        guard: Optional[InvocationGuard] = None,
        load_settings: Callable[[], Settings] = Settings.load,
        adapter_factory: Callable[[str], ProviderAdapter] = get_adapter,
    ):
        self._capture_selected_text = capture_selected_text
        self._write_clipboard = write_clipboard
        self._show_notification = show_notification
        self._play_completion_sound = play_completion_sound
        self.guard = guard or InvocationGuard()
        self._load_settings = load_settings
        self._adapter_factory = adapter_factory

    def run(self, kind: OperationKind) -> TransformOutcome:
        try:
            selected_text = self._capture_selected_text()
        except Exception as e:
            # CaptureError or any other collaborator failure
            logger.error(f"Error getting selected text: {e}")
            return TransformOutcome(kind, OutcomeStatus.FAILED, error=e)

        if not selected_text or not selected_text.strip():
            logger.debug(f"No text selected, skipping {kind.value}")
            return TransformOutcome(kind, OutcomeStatus.SKIPPED)

        settings = self._load_settings()
        if not settings.resolve_api_key():
            error = MissingCredentialError(settings.provider)
            self._report_failure(kind, settings, error)
            return TransformOutcome(kind, OutcomeStatus.FAILED, error=error)

        if not self.guard.try_enter(kind):
            return TransformOutcome(kind, OutcomeStatus.REJECTED)

        try:
            return self._transform(kind, selected_text, settings)
        finally:
            self.guard.exit(kind)

    def _transform(
        self, kind: OperationKind, text: str, settings: Settings
    ) -> TransformOutcome:
        profile = get_profile(kind)
        adapter = self._adapter_factory(settings.provider)

        logger.info(
            f"Starting {kind.value} of {len(text)} chars via {settings.provider}"
        )

        try:
            result = adapter.transform(
                get_instruction(kind, settings),
                text,
                settings,
                temperature=profile.temperature,
            )
        except TransformError as e:
            self._report_failure(kind, settings, e)
            return TransformOutcome(kind, OutcomeStatus.FAILED, error=e)

        self._best_effort("write to clipboard", self._write_clipboard, result)

        if settings.sound_enabled:
            self._best_effort("play completion sound", self._play_completion_sound)

        if settings.notifications_enabled:
            self._best_effort(
                "show notification",
                self._show_notification,
                profile.success_title,
                profile.success_body.format(preview=make_preview(result)),
            )

        logger.info(f"{kind.value} complete: {len(text)} -> {len(result)} chars")
        return TransformOutcome(kind, OutcomeStatus.SUCCESS, text=result)

    def _report_failure(
        self, kind: OperationKind, settings: Settings, error: Exception
    ) -> None:
        profile = get_profile(kind)
        message = profile.failure_body.format(error=error)
        logger.error(message)

        if settings.notifications_enabled:
            self._best_effort(
                "show notification",
                self._show_notification,
                profile.failure_title,
                message,
            )

    @staticmethod
    def _best_effort(description: str, action: Callable, *args) -> None:
        try:
            action(*args)
        except Exception as e:
            logger.error(f"Failed to {description}: {e}")
