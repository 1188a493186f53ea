"""Tests for the city generation API."""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import patch

from py_citygen.api.main import app
from py_citygen.config import settings


class TestCityAPI:
    """Test the API endpoints."""

    def setup_method(self):
        """Set up test client."""
        self.client = TestClient(app)

    def test_root(self):
        response = self.client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self):
        response = self.client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_default_options(self):
        response = self.client.get("/options/defaults")
        assert response.status_code == 200
        data = response.json()
        assert data["grid_size"] == 15
        assert data["ground_threshold"] == 0.85

    def test_generate_city(self):
        response = self.client.post("/cities/generate", json={"seed": "api", "grid_size": 6})
        assert response.status_code == 200

        data = response.json()
        assert data["seed"] == "api"
        assert len(data["grid"]) == 6
        assert all(len(row) == 6 for row in data["grid"])
        assert data["summary"]["buildings"] == len(data["buildings"])
        for volume in data["buildings"]:
            for key in ["x", "y", "z", "width", "depth", "height", "tall"]:
                assert key in volume

    def test_generate_is_reproducible(self):
        body = {"seed": "again", "grid_size": 5}
        first = self.client.post("/cities/generate", json=body).json()
        second = self.client.post("/cities/generate", json=body).json()
        assert first["grid"] == second["grid"]
        assert first["buildings"] == second["buildings"]
        assert first["trees"] == second["trees"]

    def test_summary(self):
        response = self.client.post("/cities/summary", json={"seed": "short", "grid_size": 4})
        assert response.status_code == 200
        data = response.json()
        assert data["seed"] == "short"
        assert data["grid_size"] == 4
        assert sum(data["summary"][name] for name in ["water", "park", "parking", "building"]) == 16

    @pytest.mark.parametrize(
        "body",
        [
            {"grid_size": 0},
            {"ground_threshold": 1.5},
            {"tall_percentage_cutoff": 150},
            {"min_building_height": 300, "max_building_height": 200},
        ],
    )
    def test_invalid_options(self, body):
        response = self.client.post("/cities/generate", json=body)
        assert response.status_code == 422

    def test_grid_size_limit(self):
        response = self.client.post(
            "/cities/generate", json={"grid_size": settings.max_grid_size + 1}
        )
        assert response.status_code == 400

    def test_invalid_default_workers_setting(self):
        """A bad worker setting is rejected before any generation starts."""
        with patch.object(settings, "default_workers", 0), patch(
            "py_citygen.api.main.CityGenerator"
        ) as mock_generator:
            response = self.client.post("/cities/generate", json={"grid_size": 3})

        assert response.status_code == 500
        mock_generator.assert_not_called()

    def test_default_workers_applied(self):
        with patch.object(settings, "default_workers", 3), patch(
            "py_citygen.api.main.CityGenerator"
        ) as mock_generator:
            mock_generator.return_value.generate.return_value.to_dict.return_value = {}
            response = self.client.post("/cities/generate", json={"grid_size": 3})

        assert response.status_code == 200
        options = mock_generator.call_args.args[0]
        assert options.workers == 3

    @patch("py_citygen.api.main.CityGenerator")
    def test_generation_failure(self, mock_generator):
        mock_generator.return_value.generate.side_effect = RuntimeError("boom")
        response = self.client.post("/cities/generate", json={"grid_size": 3})
        assert response.status_code == 500
