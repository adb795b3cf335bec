"""
Pytest configuration & fixtures shared by the test modules.
"""

import pytest

from sepaqr.services.rendering import QRRenderer, RenderingError


VALID_IBAN = "ES91 2100 0418 4502 0005 1332"


class FailingRenderer(QRRenderer):
    """Renderer standing in for a broken image backend."""

    def __init__(self) -> None:
        self.calls = 0

    def render(self, payload: str, size: int = 250) -> bytes:
        self.calls += 1
        raise RenderingError("backend unavailable")


class RecordingRenderer(QRRenderer):
    """Renderer that returns fixed bytes and remembers its input."""

    def __init__(self) -> None:
        self.payloads: list[tuple[str, int]] = []

    def render(self, payload: str, size: int = 250) -> bytes:
        self.payloads.append((payload, size))
        return b"image"


@pytest.fixture
def payment_input() -> dict[str, str]:
    """Raw form input for a valid payment."""
    return {
        "name": "Juan Pérez",
        "iban": VALID_IBAN,
        "amount": "100.00",
        "reference": "Factura #12345",
    }


@pytest.fixture
def failing_renderer() -> FailingRenderer:
    return FailingRenderer()


@pytest.fixture
def recording_renderer() -> RecordingRenderer:
    return RecordingRenderer()
