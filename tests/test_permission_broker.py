import pytest

from inappbrowser.browser.errors import CallbackAlreadyResolvedError
from inappbrowser.browser.permissions import (
    PermissionBroker,
    PermissionClass,
    PermissionState,
    required_permissions,
)
from inappbrowser.constants import (
    PERMISSION_CAMERA,
    PERMISSION_COARSE_LOCATION,
    PERMISSION_FINE_LOCATION,
    PERMISSION_MODIFY_AUDIO_SETTINGS,
    PERMISSION_RECORD_AUDIO,
    REQUEST_CAMERA_PERMISSION,
    REQUEST_LOCATION_PERMISSION,
    REQUEST_STANDARD_PERMISSION,
    RESOURCE_AUDIO_CAPTURE,
    RESOURCE_VIDEO_CAPTURE,
)


class _FakePermissionSystem:
    def __init__(self, granted=(), declared=(), request_error=None):
        self.granted = set(granted)
        self.declared = set(declared)
        self.request_error = request_error
        self.requests = []

    def check_granted(self, permission):
        return permission in self.granted

    def is_declared(self, permission):
        return permission in self.declared

    def request_permissions(self, permissions, request_code):
        if self.request_error is not None:
            raise self.request_error
        self.requests.append((tuple(permissions), request_code))


class _Recorder:
    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)


def test_required_permissions_maps_resources_without_duplicates():
    needed = required_permissions([RESOURCE_AUDIO_CAPTURE, RESOURCE_VIDEO_CAPTURE, RESOURCE_AUDIO_CAPTURE])
    assert needed == [PERMISSION_RECORD_AUDIO, PERMISSION_MODIFY_AUDIO_SETTINGS, PERMISSION_CAMERA]


def test_standard_request_grants_immediately_when_all_granted():
    system = _FakePermissionSystem(granted={PERMISSION_CAMERA})
    broker = PermissionBroker(system)
    callback = _Recorder()

    broker.request_standard([RESOURCE_VIDEO_CAPTURE], callback)

    assert callback.calls == [(True, (RESOURCE_VIDEO_CAPTURE,))]
    assert system.requests == []
    assert broker.state(PermissionClass.STANDARD) == PermissionState.IDLE


def test_standard_request_prompts_only_for_missing_permissions():
    system = _FakePermissionSystem(granted={PERMISSION_RECORD_AUDIO})
    broker = PermissionBroker(system)
    callback = _Recorder()

    broker.request_standard([RESOURCE_AUDIO_CAPTURE, RESOURCE_VIDEO_CAPTURE], callback)

    assert system.requests == [
        ((PERMISSION_MODIFY_AUDIO_SETTINGS, PERMISSION_CAMERA), REQUEST_STANDARD_PERMISSION)
    ]
    assert broker.state(PermissionClass.STANDARD) == PermissionState.PENDING
    assert callback.calls == []

    broker.on_permissions_result(
        REQUEST_STANDARD_PERMISSION, (PERMISSION_MODIFY_AUDIO_SETTINGS, PERMISSION_CAMERA), (True, True)
    )

    assert callback.calls == [(True, (RESOURCE_AUDIO_CAPTURE, RESOURCE_VIDEO_CAPTURE))]
    assert broker.state(PermissionClass.STANDARD) == PermissionState.IDLE


def test_standard_request_denies_entirely_on_partial_grant():
    broker = PermissionBroker(_FakePermissionSystem())
    callback = _Recorder()

    broker.request_standard([RESOURCE_AUDIO_CAPTURE], callback)
    broker.on_permissions_result(
        REQUEST_STANDARD_PERMISSION, (PERMISSION_RECORD_AUDIO, PERMISSION_MODIFY_AUDIO_SETTINGS), (True, False)
    )

    assert callback.calls == [(False, ())]


def test_standard_request_denies_on_empty_grant_results():
    broker = PermissionBroker(_FakePermissionSystem())
    callback = _Recorder()

    broker.request_standard([RESOURCE_VIDEO_CAPTURE], callback)
    broker.on_permissions_result(REQUEST_STANDARD_PERMISSION, (), ())

    assert callback.calls == [(False, ())]


def test_new_standard_request_supersedes_pending_one():
    broker = PermissionBroker(_FakePermissionSystem())
    first = _Recorder()
    second = _Recorder()

    broker.request_standard([RESOURCE_VIDEO_CAPTURE], first)
    broker.request_standard([RESOURCE_VIDEO_CAPTURE], second)

    assert first.calls == [(False, ())]
    broker.on_permissions_result(REQUEST_STANDARD_PERMISSION, (PERMISSION_CAMERA,), (True,))
    assert second.calls == [(True, (RESOURCE_VIDEO_CAPTURE,))]


def test_geolocation_granted_without_prompt_when_either_permission_held():
    system = _FakePermissionSystem(granted={PERMISSION_COARSE_LOCATION})
    broker = PermissionBroker(system)
    callback = _Recorder()

    broker.request_geolocation("https://maps.example", callback)

    assert callback.calls == [("https://maps.example", True, False)]
    assert system.requests == []


def test_geolocation_granted_when_any_alternative_granted():
    system = _FakePermissionSystem()
    broker = PermissionBroker(system)
    callback = _Recorder()

    broker.request_geolocation("https://maps.example", callback)
    assert system.requests == [((PERMISSION_FINE_LOCATION, PERMISSION_COARSE_LOCATION), REQUEST_LOCATION_PERMISSION)]

    broker.on_permissions_result(
        REQUEST_LOCATION_PERMISSION, (PERMISSION_FINE_LOCATION, PERMISSION_COARSE_LOCATION), (False, True)
    )

    assert callback.calls == [("https://maps.example", True, False)]
    assert broker.was_geolocation_permission_denied is False


def test_geolocation_deny_is_sticky_for_the_session():
    system = _FakePermissionSystem()
    broker = PermissionBroker(system)
    first = _Recorder()
    second = _Recorder()

    broker.request_geolocation("https://maps.example", first)
    broker.on_permissions_result(
        REQUEST_LOCATION_PERMISSION, (PERMISSION_FINE_LOCATION, PERMISSION_COARSE_LOCATION), (False, False)
    )
    assert first.calls == [("https://maps.example", False, False)]
    assert broker.was_geolocation_permission_denied is True

    system.granted.add(PERMISSION_FINE_LOCATION)
    broker.request_geolocation("https://maps.example", second)

    assert second.calls == [("https://maps.example", False, False)]
    assert len(system.requests) == 1


def test_camera_grant_resumes_and_denial_cancels():
    system = _FakePermissionSystem(declared={PERMISSION_CAMERA})
    broker = PermissionBroker(system)
    outcomes = []

    broker.request_camera(lambda: outcomes.append("granted"), lambda: outcomes.append("denied"))
    assert system.requests == [((PERMISSION_CAMERA,), REQUEST_CAMERA_PERMISSION)]
    broker.on_permissions_result(REQUEST_CAMERA_PERMISSION, (PERMISSION_CAMERA,), (True,))

    broker.request_camera(lambda: outcomes.append("granted"), lambda: outcomes.append("denied"))
    broker.on_permissions_result(REQUEST_CAMERA_PERMISSION, (PERMISSION_CAMERA,), (False,))

    assert outcomes == ["granted", "denied"]


def test_camera_resume_failure_degrades_to_cancel():
    broker = PermissionBroker(_FakePermissionSystem(declared={PERMISSION_CAMERA}))
    outcomes = []

    def _resume():
        raise RuntimeError("chooser exploded")

    broker.request_camera(_resume, lambda: outcomes.append("denied"))
    broker.on_permissions_result(REQUEST_CAMERA_PERMISSION, (PERMISSION_CAMERA,), (True,))

    assert outcomes == ["denied"]


def test_camera_ready_when_permission_not_declared():
    broker = PermissionBroker(_FakePermissionSystem())
    assert broker.camera_ready() is True

    broker = PermissionBroker(_FakePermissionSystem(declared={PERMISSION_CAMERA}))
    assert broker.camera_ready() is False

    broker = PermissionBroker(_FakePermissionSystem(declared={PERMISSION_CAMERA}, granted={PERMISSION_CAMERA}))
    assert broker.camera_ready() is True


def test_prompt_failure_resolves_denied():
    broker = PermissionBroker(_FakePermissionSystem(request_error=RuntimeError("no activity")))
    callback = _Recorder()

    broker.request_standard([RESOURCE_VIDEO_CAPTURE], callback)

    assert callback.calls == [(False, ())]
    assert broker.state(PermissionClass.STANDARD) == PermissionState.IDLE


def test_stale_or_unknown_results_are_ignored():
    broker = PermissionBroker(_FakePermissionSystem())

    assert broker.on_permissions_result(REQUEST_STANDARD_PERMISSION, (), ()) is False
    assert broker.on_permissions_result(999, (), ()) is False


def test_permission_classes_are_independent():
    system = _FakePermissionSystem()
    broker = PermissionBroker(system)
    standard = _Recorder()
    location = _Recorder()

    broker.request_standard([RESOURCE_VIDEO_CAPTURE], standard)
    broker.request_geolocation("https://maps.example", location)

    assert broker.state(PermissionClass.STANDARD) == PermissionState.PENDING
    assert broker.state(PermissionClass.GEOLOCATION) == PermissionState.PENDING

    broker.on_permissions_result(REQUEST_LOCATION_PERMISSION, (PERMISSION_FINE_LOCATION,), (True,))
    assert standard.calls == []
    assert location.calls == [("https://maps.example", True, False)]


def test_cancel_all_denies_every_pending_request():
    broker = PermissionBroker(_FakePermissionSystem())
    standard = _Recorder()
    location = _Recorder()
    broker.request_standard([RESOURCE_VIDEO_CAPTURE], standard)
    broker.request_geolocation("https://maps.example", location)

    broker.cancel_all()

    assert standard.calls == [(False, ())]
    assert location.calls == [("https://maps.example", False, False)]
    assert broker.was_geolocation_permission_denied is False


def test_renderer_callback_cannot_be_resolved_twice():
    from inappbrowser.browser.completion import OneShot

    completion = OneShot(_Recorder(), label="test")
    completion.resolve(True)

    with pytest.raises(CallbackAlreadyResolvedError):
        completion.resolve(False)
