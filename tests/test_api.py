"""Tests for the oto and alias API routers.

Each test class mounts only the router under test; settings are injected
via FastAPI dependency overrides where defaults matter.
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.otoutil.api.exception_handlers import register_exception_handlers
from src.otoutil.api.routers.alias import router as alias_router
from src.otoutil.api.routers.oto import router as oto_router
from src.otoutil.config import Settings, get_settings
from src.otoutil.main import app as main_app
from src.otoutil.utils.pitch_range import CharacterCase
from src.otoutil.utils.suffix import CaseSensitivity


@pytest.fixture
def oto_client() -> TestClient:
    """Client for an app with only the oto router and error handlers."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(oto_router)
    return TestClient(app)


@pytest.fixture
def alias_client() -> TestClient:
    """Client for an app with only the alias router and fixed settings."""
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(alias_router)
    app.dependency_overrides[get_settings] = lambda: Settings(
        default_bottom_pitch="C3",
        default_top_pitch="C5",
        pitch_alphabet_case=CharacterCase.UPPER,
        pitch_case_sensitivity=CaseSensitivity.INSENSITIVE,
        max_pitch_range_octaves=16,
    )
    return TestClient(app)


class TestParseLine:
    """Tests for POST /oto/parse."""

    def test_valid_line(self, oto_client: TestClient) -> None:
        """Test parsing a valid line returns fields and a normalized line."""
        response = oto_client.post("/oto/parse", json={"line": "f.wav=a,1,2,3,4,5"})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is True
        assert data["error"] is None
        assert data["left"] == 1.0
        assert data["overlap"] == 5.0
        assert data["line"] == "f.wav=a,1.000,2.000,3.000,4.000,5.000"

    def test_invalid_line_is_not_http_error(self, oto_client: TestClient) -> None:
        """Test that a parse failure is reported in the body."""
        response = oto_client.post("/oto/parse", json={"line": "f.wav=a,1,x,3,4,5"})
        assert response.status_code == 200
        data = response.json()
        assert data["valid"] is False
        assert data["error"] == "consonant_convert_failed"
        assert data["error_message"] == "Convert consonant string to double failed."
        assert data["left"] == 1.0
        assert data["line"] is None


class TestFormatEntry:
    """Tests for POST /oto/format."""

    def test_format(self, oto_client: TestClient) -> None:
        """Test formatting entry fields to a line."""
        response = oto_client.post(
            "/oto/format",
            json={
                "filename": "_ka.wav",
                "alias": "- ka",
                "left": 45,
                "consonant": 120.5,
                "right": -140,
                "preutterance": 80,
                "overlap": 15.25,
            },
        )
        assert response.status_code == 200
        assert response.json() == {
            "line": "_ka.wav=- ka,45.000,120.500,-140.000,80.000,15.250"
        }

    def test_empty_filename_rejected(self, oto_client: TestClient) -> None:
        """Test that request validation rejects an empty filename."""
        response = oto_client.post("/oto/format", json={"filename": ""})
        assert response.status_code == 422


class TestParseFile:
    """Tests for POST /oto/parse-file."""

    CONTENT = "# header\n_ka.wav=- か,45,120,-140,80,15\nbroken\n"

    def test_lenient(self, oto_client: TestClient) -> None:
        """Test that invalid lines are skipped by default."""
        response = oto_client.post(
            "/oto/parse-file",
            files={"file": ("oto.ini", self.CONTENT.encode("cp932"), "text/plain")},
        )
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["alias"] == "- か"

    def test_strict_returns_400(self, oto_client: TestClient) -> None:
        """Test that strict mode maps OtoParseError to 400."""
        response = oto_client.post(
            "/oto/parse-file",
            params={"strict": True},
            files={"file": ("oto.ini", self.CONTENT.encode("utf-8"), "text/plain")},
        )
        assert response.status_code == 400
        assert response.json()["detail"].startswith("Line 3:")


class TestPitchRange:
    """Tests for GET /alias/pitch-range."""

    def test_explicit_range(self, alias_client: TestClient) -> None:
        """Test a range with explicit endpoints."""
        response = alias_client.get(
            "/alias/pitch-range", params={"bottom": "F4", "top": "D5"}
        )
        assert response.status_code == 200
        assert response.json() == {"pitches": ["F4", "G4", "A4", "B4", "C5", "D5"]}

    def test_defaults_from_settings(self, alias_client: TestClient) -> None:
        """Test that omitted endpoints use configured defaults."""
        response = alias_client.get("/alias/pitch-range", params={"case": "lower"})
        pitches = response.json()["pitches"]
        assert pitches[0] == "c3"
        assert pitches[-1] == "c5"
        assert len(pitches) == 15

    def test_malformed_range_is_empty(self, alias_client: TestClient) -> None:
        """Test that malformed endpoints give an empty list."""
        response = alias_client.get(
            "/alias/pitch-range", params={"bottom": "C#4", "top": "C5"}
        )
        assert response.status_code == 200
        assert response.json() == {"pitches": []}

    def test_oversized_range_rejected(self, alias_client: TestClient) -> None:
        """Test that a range beyond the configured octave limit returns 400."""
        response = alias_client.get(
            "/alias/pitch-range", params={"bottom": "C0", "top": "C999999999"}
        )
        assert response.status_code == 400
        assert "octaves" in response.json()["detail"]


class TestRemovePitchSuffix:
    """Tests for POST /alias/remove-pitch-suffix."""

    def test_removes_with_defaults(self, alias_client: TestClient) -> None:
        """Test stripping using the configured range and case policy."""
        response = alias_client.post(
            "/alias/remove-pitch-suffix", json={"alias": "kac4"}
        )
        assert response.status_code == 200
        assert response.json() == {"alias": "ka", "removed_pitch": "C4"}

    def test_case_sensitive_miss(self, alias_client: TestClient) -> None:
        """Test that an explicit case policy overrides the default."""
        response = alias_client.post(
            "/alias/remove-pitch-suffix",
            json={"alias": "kac4", "case_sensitivity": "sensitive"},
        )
        assert response.json() == {"alias": "kac4", "removed_pitch": None}

    def test_pitch_followed_by_index(self, alias_client: TestClient) -> None:
        """Test that a pitch before a duplicate index is still stripped."""
        response = alias_client.post(
            "/alias/remove-pitch-suffix", json={"alias": "kaC4_2"}
        )
        assert response.json() == {"alias": "ka_2", "removed_pitch": "C4"}

    def test_oversized_range_rejected(self, alias_client: TestClient) -> None:
        """Test that a range beyond the configured octave limit returns 400."""
        response = alias_client.post(
            "/alias/remove-pitch-suffix",
            json={"alias": "ka", "bottom_pitch": "C0", "top_pitch": "C999999999"},
        )
        assert response.status_code == 400
        assert "octaves" in response.json()["detail"]


class TestDigitSuffix:
    """Tests for POST /alias/digit-suffix."""

    @pytest.mark.parametrize(
        ("text", "digits", "position"),
        [("abc123", "123", 3), ("123", "123", None), ("abc", "", None)],
    )
    def test_digit_suffix(
        self, alias_client: TestClient, text: str, digits: str, position: int | None
    ) -> None:
        """Test the three digit-suffix outcomes."""
        response = alias_client.post("/alias/digit-suffix", json={"text": text})
        assert response.json() == {"digits": digits, "position": position}


class TestApplication:
    """Tests for the assembled application."""

    def test_health(self) -> None:
        """Test the health check endpoint."""
        client = TestClient(main_app)
        assert client.get("/health").json() == {"status": "healthy"}

    def test_routers_mounted_under_api_prefix(self) -> None:
        """Test that routers are reachable under /api/v1."""
        client = TestClient(main_app)
        response = client.post("/api/v1/oto/parse", json={"line": ""})
        assert response.json()["error"] == "empty_oto_string"
