"""Arbitration of OS permission prompts raised on behalf of page content.

Three permission classes are tracked independently, each with at most one
outstanding OS prompt:

* standard: media capture resources requested by the page,
* geolocation: location access, with a session-wide sticky deny,
* camera: the camera permission needed before launching capture intents
  from the file chooser.

The broker never caches grants. Every request asks the permission system,
except that a denied geolocation prompt suppresses all later geolocation
prompts for the rest of the session.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum

from inappbrowser.browser.completion import OneShot
from inappbrowser.constants import (
    LOCATION_PERMISSIONS,
    PERMISSION_CAMERA,
    REQUEST_CAMERA_PERMISSION,
    REQUEST_LOCATION_PERMISSION,
    REQUEST_STANDARD_PERMISSION,
    RESOURCE_PERMISSIONS,
)

logger = logging.getLogger(__name__)


class PermissionClass(str, Enum):
    STANDARD = "STANDARD"
    GEOLOCATION = "GEOLOCATION"
    CAMERA = "CAMERA"


class PermissionState(str, Enum):
    IDLE = "IDLE"
    PENDING = "PENDING"


REQUEST_CODES = {
    PermissionClass.STANDARD: REQUEST_STANDARD_PERMISSION,
    PermissionClass.GEOLOCATION: REQUEST_LOCATION_PERMISSION,
    PermissionClass.CAMERA: REQUEST_CAMERA_PERMISSION,
}
CLASS_BY_REQUEST_CODE = {code: permission_class for permission_class, code in REQUEST_CODES.items()}


@dataclass
class PendingPermission:
    permission_class: PermissionClass
    completion: OneShot
    resources: tuple[str, ...] = ()
    origin: str | None = None


def required_permissions(resources: Iterable[str]) -> list[str]:
    needed = []
    for resource in resources:
        for permission in RESOURCE_PERMISSIONS.get(resource, ()):
            if permission not in needed:
                needed.append(permission)
    return needed


class PermissionBroker:
    def __init__(self, permission_system):
        self.permissions = permission_system
        self.was_geolocation_permission_denied = False
        self._pending: dict[PermissionClass, PendingPermission] = {}

    def state(self, permission_class: PermissionClass) -> PermissionState:
        if permission_class in self._pending:
            return PermissionState.PENDING
        return PermissionState.IDLE

    def camera_permission_declared(self) -> bool:
        try:
            return bool(self.permissions.is_declared(PERMISSION_CAMERA))
        except Exception as exc:
            logger.debug("Could not read declared permissions: %s", exc)
            return False

    def camera_permission_granted(self) -> bool:
        return bool(self.permissions.check_granted(PERMISSION_CAMERA))

    def camera_ready(self) -> bool:
        """True when capture intents may be launched without a prompt."""
        return not self.camera_permission_declared() or self.camera_permission_granted()

    def request_standard(self, resources: Iterable[str], callback: Callable[[bool, tuple], None]) -> None:
        requested = tuple(resources)
        completion = OneShot(callback, label="standard permission request")
        missing = [
            permission
            for permission in required_permissions(requested)
            if not self.permissions.check_granted(permission)
        ]
        if not missing:
            completion.resolve(True, requested)
            return

        self._begin(
            PendingPermission(PermissionClass.STANDARD, completion, resources=requested),
            missing,
        )

    def request_geolocation(self, origin: str, callback: Callable[[str, bool, bool], None]) -> None:
        completion = OneShot(callback, label="geolocation permission request")
        if self.was_geolocation_permission_denied:
            completion.resolve(origin, False, False)
            return
        if any(self.permissions.check_granted(permission) for permission in LOCATION_PERMISSIONS):
            completion.resolve(origin, True, False)
            return

        self._begin(
            PendingPermission(PermissionClass.GEOLOCATION, completion, origin=origin),
            list(LOCATION_PERMISSIONS),
        )

    def request_camera(self, on_granted: Callable[[], None], on_denied: Callable[[], None]) -> None:
        def _decide(granted):
            if not granted:
                on_denied()
                return
            try:
                on_granted()
            except Exception as exc:
                logger.debug("Error resuming after camera grant: %s", exc)
                on_denied()

        completion = OneShot(_decide, label="camera permission request")
        self._begin(PendingPermission(PermissionClass.CAMERA, completion), [PERMISSION_CAMERA])

    def on_permissions_result(self, request_code: int, permissions, grant_results) -> bool:
        """Handle the OS callback for a prompt; returns False for unknown or stale results."""
        permission_class = CLASS_BY_REQUEST_CODE.get(request_code)
        if permission_class is None:
            return False
        pending = self._pending.pop(permission_class, None)
        if pending is None:
            logger.debug("Ignoring %s permission result with no pending request", permission_class.value)
            return False

        grants = [bool(result) for result in grant_results or ()]
        if permission_class == PermissionClass.GEOLOCATION:
            # Either fine or coarse location is enough.
            granted = any(grants)
            if not granted:
                self.was_geolocation_permission_denied = True
            pending.completion.resolve(pending.origin, granted, False)
        else:
            granted = bool(grants) and all(grants)
            self._resolve(pending, granted)
        return True

    def cancel_all(self) -> None:
        for permission_class in list(self._pending):
            pending = self._pending.pop(permission_class)
            self._resolve(pending, False)

    def _begin(self, pending: PendingPermission, permissions: list[str]) -> None:
        superseded = self._pending.pop(pending.permission_class, None)
        if superseded is not None:
            logger.debug("Superseding pending %s permission request", pending.permission_class.value)
            self._resolve(superseded, False)

        self._pending[pending.permission_class] = pending
        try:
            self.permissions.request_permissions(tuple(permissions), REQUEST_CODES[pending.permission_class])
        except Exception as exc:
            logger.warning("Could not prompt for %s: %s", ", ".join(permissions), exc)
            if self._pending.get(pending.permission_class) is pending:
                del self._pending[pending.permission_class]
                self._resolve(pending, False)

    @staticmethod
    def _resolve(pending: PendingPermission, granted: bool) -> None:
        if pending.permission_class == PermissionClass.STANDARD:
            pending.completion.resolve(granted, pending.resources if granted else ())
        elif pending.permission_class == PermissionClass.GEOLOCATION:
            pending.completion.resolve(pending.origin, granted, False)
        else:
            pending.completion.resolve(granted)


__all__ = [
    "PendingPermission",
    "PermissionBroker",
    "PermissionClass",
    "PermissionState",
    "required_permissions",
]
