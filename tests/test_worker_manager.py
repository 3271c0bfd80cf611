from inappbrowser_qt.helpers import worker_manager as worker_manager_module


class _Signal:
    def __init__(self):
        self._callbacks = []

    def connect(self, callback):
        self._callbacks.append(callback)

    def emit(self, payload):
        for callback in list(self._callbacks):
            callback(payload)


class _Signals:
    def __init__(self):
        self.result = _Signal()
        self.error = _Signal()


class _FakeWorker:
    def __init__(self, fn):
        self.fn = fn
        self.signals = _Signals()


class _ThreadPool:
    def start(self, worker):
        try:
            payload = worker.fn()
            worker.signals.result.emit(payload)
        except Exception as exc:
            worker.signals.error.emit(f"{type(exc).__name__}: {exc}")


def test_submit_delivers_result(monkeypatch):
    monkeypatch.setattr(worker_manager_module, "Worker", _FakeWorker)
    manager = worker_manager_module.WorkerManager(_ThreadPool())
    results = []

    manager.submit(lambda: {"ok": True}, results.append)

    assert results == [{"ok": True}]


def test_submit_routes_result_callback_exceptions_to_error_handler(monkeypatch):
    monkeypatch.setattr(worker_manager_module, "Worker", _FakeWorker)
    manager = worker_manager_module.WorkerManager(_ThreadPool())
    errors = []

    def _on_result(_payload):
        raise RuntimeError("result callback failed")

    manager.submit(lambda: {"ok": True}, _on_result, errors.append)

    assert len(errors) == 1
    assert "RuntimeError" in errors[0]
    assert "result callback failed" in errors[0]


def test_submit_uses_default_error_handler(monkeypatch):
    monkeypatch.setattr(worker_manager_module, "Worker", _FakeWorker)
    reported = []
    manager = worker_manager_module.WorkerManager(_ThreadPool(), on_default_error=reported.append)

    def _fail():
        raise ValueError("probe failed")

    manager.submit(_fail, lambda _payload: None)

    assert reported == ["ValueError: probe failed"]


class _DeferredPool:
    def __init__(self):
        self.workers = []
        self.cleared = False

    def start(self, worker):
        self.workers.append(worker)

    def clear(self):
        self.cleared = True

    def waitForDone(self, _msecs):
        return True


def test_shutdown_drops_late_results_and_new_tasks(monkeypatch):
    monkeypatch.setattr(worker_manager_module, "Worker", _FakeWorker)
    pool = _DeferredPool()
    manager = worker_manager_module.WorkerManager(pool)
    results = []

    assert manager.submit(lambda: "late", results.append) is True
    assert manager.shutdown() is True
    pool.workers[0].signals.result.emit("late")

    assert results == []
    assert pool.cleared is True
    assert manager.submit(lambda: "after", results.append) is False
    assert len(pool.workers) == 1
