"""Tests for run settings and logging setup."""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from config import DEFAULT_ALGORITHM, Settings
from logging_config import setup_logging


class TestSettings:
    """Tests for Settings validation and helpers."""

    def test_defaults(self):
        s = Settings()
        assert s.algorithm == DEFAULT_ALGORITHM
        assert s.speed == 5
        assert s.radius == 4

    @pytest.mark.parametrize("speed", [0, -3, 2.5, True, "fast"])
    def test_bad_speed(self, speed):
        with pytest.raises(ValueError):
            Settings(speed=speed)

    @pytest.mark.parametrize("radius", [0, -1, "far"])
    def test_bad_radius(self, radius):
        with pytest.raises(ValueError):
            Settings(radius=radius)

    @pytest.mark.parametrize("speed, expected", [(1, 1.0), (2, 1.0), (8, 3.0), (64, 6.0)])
    def test_route_multiplier(self, speed, expected):
        assert Settings(speed=speed).route_multiplier == pytest.approx(expected)

    def test_updated_ignores_none(self):
        s = Settings(speed=3).updated(speed=None, algorithm="bfs")
        assert s.speed == 3
        assert s.algorithm == "bfs"

    def test_updated_validates(self):
        with pytest.raises(ValueError):
            Settings().updated(speed=0)

    def test_from_dict(self):
        s = Settings.from_dict({"speed": 20})
        assert s.speed == 20 and s.algorithm == DEFAULT_ALGORITHM
        assert Settings.from_dict(s.to_dict()) == s


class TestLogging:
    """Tests for setup_logging."""

    @pytest.fixture(autouse=True)
    def remove_handlers(self):
        yield
        root = logging.getLogger()
        for handler in list(root.handlers):
            if type(handler) is logging.StreamHandler or isinstance(handler, RotatingFileHandler):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(logging.WARNING)

    def test_writes_log_file(self, tmp_path):
        setup_logging(log_dir=tmp_path)
        logging.getLogger("engine.test").debug("hello from the test")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello from the test" in (tmp_path / "pathfinding.log").read_text()

    def test_reinit_does_not_duplicate(self, tmp_path):
        setup_logging(log_dir=tmp_path)
        setup_logging(log_dir=tmp_path)
        assert len(logging.getLogger().handlers) == 2
