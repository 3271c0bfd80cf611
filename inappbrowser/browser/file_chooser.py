import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from inappbrowser.browser.completion import OneShot
from inappbrowser.browser.errors import ChooserLaunchError
from inappbrowser.browser.events import ChooserResult
from inappbrowser.browser.intents import (
    ACTION_CHOOSER,
    ACTION_GET_CONTENT,
    ACTION_IMAGE_CAPTURE,
    ACTION_VIDEO_CAPTURE,
    CATEGORY_OPENABLE,
    IntentSpec,
)
from inappbrowser.constants import (
    PHOTO_SCRATCH_PREFIX,
    PHOTO_SCRATCH_SUFFIX,
    VIDEO_SCRATCH_PREFIX,
    VIDEO_SCRATCH_SUFFIX,
)

logger = logging.getLogger(__name__)


@dataclass
class FileChooserRequest:
    accept_types: tuple[str, ...]
    capture_enabled: bool
    completion: OneShot
    photo_file: str | None = None
    photo_uri: str | None = None
    video_file: str | None = None
    video_uri: str | None = None
    permission_requested: bool = False

    @property
    def accepts_any(self) -> bool:
        return not any((value or "").strip() for value in self.accept_types)

    def mentions(self, kind: str) -> bool:
        return any(kind in (value or "").lower() for value in self.accept_types)

    def wants(self, kind: str) -> bool:
        return self.accepts_any or self.mentions(kind)

    def content_mime_type(self) -> str:
        wants_image = self.mentions("image")
        wants_video = self.mentions("video")
        if wants_video and not wants_image:
            return "video/*"
        if wants_image and not wants_video:
            return "image/*"
        return "*/*"


class FileChooserCoordinator:
    """Merges camera/video capture and content picking into one chooser result.

    The renderer callback receives exactly one value: a list of URIs, or None
    when nothing was selected.
    """

    def __init__(self, broker, launcher, storage):
        self.broker = broker
        self.launcher = launcher
        self.storage = storage
        self.request: FileChooserRequest | None = None

    @property
    def pending(self) -> bool:
        return self.request is not None

    def open(
        self,
        accept_types: Iterable[str],
        capture_enabled: bool,
        callback: Callable[[list | None], None],
    ) -> bool:
        if self.request is not None:
            logger.debug("New file chooser request supersedes a pending one")
            self.cancel()

        request = FileChooserRequest(
            accept_types=tuple(accept_types or ()),
            capture_enabled=bool(capture_enabled),
            completion=OneShot(callback, label="file chooser"),
        )
        self.request = request

        if self.broker.camera_permission_declared() and not self.broker.camera_permission_granted():
            # Wait for the prompt; the chooser is launched from the permission result.
            request.permission_requested = True
            self.broker.request_camera(
                on_granted=lambda: self._retry_if_current(request),
                on_denied=lambda: self._cancel_if_current(request),
            )
            return True

        return self._launch()

    def retry(self) -> bool:
        if self.request is None:
            return False
        return self._launch()

    def _retry_if_current(self, request: FileChooserRequest) -> bool:
        if self.request is not request:
            logger.debug("Ignoring camera grant for a superseded file chooser")
            return False
        return self._launch()

    def _cancel_if_current(self, request: FileChooserRequest) -> None:
        if self.request is request:
            self.cancel()

    def cancel(self) -> None:
        request, self.request = self.request, None
        if request is None:
            return
        self._discard_unused(request)
        request.completion.resolve(None)

    def on_activity_result(self, result: ChooserResult) -> None:
        request, self.request = self.request, None
        if request is None:
            logger.debug("Ignoring chooser result with no pending file chooser")
            return

        uris = self._resolve_uris(request, result)
        self._discard_unused(request)
        request.completion.resolve(uris)

    def _launch(self) -> bool:
        request = self.request
        try:
            self._launch_chooser(request)
            return True
        except Exception as exc:
            logger.debug("Error launching file chooser: %s", exc)
            self.cancel()
            return False

    def _launch_chooser(self, request: FileChooserRequest) -> None:
        camera_ready = self.broker.camera_ready()
        capture_intents = self._build_capture_intents(request) if camera_ready else []

        if request.capture_enabled and camera_ready:
            if not capture_intents:
                raise ChooserLaunchError("No capture intent matches the accepted file types.")
            if len(capture_intents) == 1:
                intent = capture_intents[0]
            else:
                intent = IntentSpec(
                    action=ACTION_CHOOSER,
                    target=capture_intents[0],
                    initial_intents=tuple(capture_intents[1:]),
                )
        elif not request.capture_enabled:
            content_intent = IntentSpec(
                action=ACTION_GET_CONTENT,
                categories=(CATEGORY_OPENABLE,),
                mime_type=request.content_mime_type(),
            )
            intent = IntentSpec(
                action=ACTION_CHOOSER,
                target=content_intent,
                initial_intents=tuple(capture_intents),
            )
        else:
            # Capture-only request without camera access cannot be satisfied.
            self.cancel()
            return

        self.launcher.launch_for_result(intent, lambda result: self._on_result_for(request, result))

    def _on_result_for(self, request: FileChooserRequest, result: ChooserResult) -> None:
        if self.request is not request:
            logger.debug("Dropping chooser result for a superseded file chooser")
            return
        self.on_activity_result(result)

    def _build_capture_intents(self, request: FileChooserRequest) -> list[IntentSpec]:
        intents = []
        if request.wants("image"):
            request.photo_file = self.storage.create_unique_file(PHOTO_SCRATCH_PREFIX, PHOTO_SCRATCH_SUFFIX)
            request.photo_uri = self.storage.content_uri_for(request.photo_file)
            intents.append(IntentSpec(action=ACTION_IMAGE_CAPTURE, output_uri=request.photo_uri))
        if request.wants("video"):
            request.video_file = self.storage.create_unique_file(VIDEO_SCRATCH_PREFIX, VIDEO_SCRATCH_SUFFIX)
            request.video_uri = self.storage.content_uri_for(request.video_file)
            intents.append(IntentSpec(action=ACTION_VIDEO_CAPTURE, output_uri=request.video_uri))
        return intents

    def _resolve_uris(self, request: FileChooserRequest, result: ChooserResult) -> list[str] | None:
        if result is None or not result.ok:
            return None
        if result.uris:
            return list(result.uris)
        # A cancelled capture leaves an empty scratch file behind.
        if request.photo_uri and self.storage.file_size(request.photo_file) > 0:
            return [request.photo_uri]
        if request.video_uri and self.storage.file_size(request.video_file) > 0:
            return [request.video_uri]
        return None

    def _discard_unused(self, request: FileChooserRequest) -> None:
        for path in (request.photo_file, request.video_file):
            if path and self.storage.file_size(path) == 0:
                self.storage.discard(path)


__all__ = ["FileChooserCoordinator", "FileChooserRequest"]
