import pytest

from subtitle_payload import encoding


class _NoGuess:
    def best(self):
        return None


class _Guess:
    def __init__(self, name):
        self.encoding = name

    def __call__(self, data):
        guess = self

        class _Matches:
            def best(self):
                return guess

        return _Matches()


@pytest.fixture
def no_detector(monkeypatch):
    """Keep charset_normalizer out of tie-breaks so catalog order decides."""
    monkeypatch.setattr(encoding, "from_bytes", lambda data: _NoGuess())


@pytest.fixture
def detector_guess(monkeypatch):
    def _install(name):
        monkeypatch.setattr(encoding, "from_bytes", _Guess(name))

    return _install
