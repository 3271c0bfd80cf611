from inappbrowser.browser.errors import CallbackAlreadyResolvedError


class OneShot:
    """Delivers a value to a renderer callback at most once."""

    def __init__(self, callback, label="completion"):
        self._callback = callback
        self._label = label
        self._resolved = False

    @property
    def resolved(self) -> bool:
        return self._resolved

    def resolve(self, *args):
        if self._resolved:
            raise CallbackAlreadyResolvedError(f"{self._label} was already resolved")
        self._resolved = True
        callback, self._callback = self._callback, None
        if callback is not None:
            callback(*args)


__all__ = ["OneShot"]
