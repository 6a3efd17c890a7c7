"""Tests for logging setup."""

import logging


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_configures_package_logger(self, reset_package_logger):
        """Test the default logger, level and handler."""
        from src.tiletrace.utils.logconfig import PACKAGE_LOGGER, setup_logging

        logger = setup_logging()
        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.WARNING
        assert logger.propagate is False
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], logging.StreamHandler)

    def test_level_by_name(self, reset_package_logger):
        """Test that a level name is accepted in any case."""
        from src.tiletrace.utils.logconfig import setup_logging

        assert setup_logging(level="debug").level == logging.DEBUG
        assert setup_logging(level="INFO").level == logging.INFO

    def test_repeated_calls_replace_handlers(self, reset_package_logger):
        """Test that calling twice does not duplicate handlers."""
        from src.tiletrace.utils.logconfig import setup_logging

        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_log_file(self, reset_package_logger, tmp_path):
        """Test that module loggers write through to the log file."""
        from src.tiletrace.utils.logconfig import setup_logging

        log_file = tmp_path / "render.log"
        logger = setup_logging(level=logging.INFO, log_format="%(levelname)s %(message)s", log_file=log_file)
        assert len(logger.handlers) == 2

        logging.getLogger("src.tiletrace.core.renderer").info("hello from a module")
        for handler in logger.handlers:
            handler.flush()
        assert "INFO hello from a module" in log_file.read_text()


class TestLibraryLogging:
    """Tests for log records emitted by library code."""

    def test_render_logs_start_and_finish(self, caplog):
        """Test the INFO records of a render."""
        from src.tiletrace.core.renderer import TileRenderer
        from src.tiletrace.scene.demo import create_demo_scene

        scene, camera = create_demo_scene(8, 8)
        with caplog.at_level(logging.INFO, logger="src.tiletrace"):
            TileRenderer(camera, scene).render()

        messages = [record.getMessage() for record in caplog.records]
        assert "Rendering 8x8 image" in messages
        assert any(message.startswith("Rendered 1 tiles") for message in messages)

    def test_render_without_lights_warns(self, caplog):
        """Test that a scene without lights logs a warning."""
        from src.tiletrace.camera.pinhole import Camera
        from src.tiletrace.core.renderer import TileRenderer
        from src.tiletrace.scene.manager import SceneStore

        scene = SceneStore()
        scene.add_sphere()
        with caplog.at_level(logging.WARNING, logger="src.tiletrace"):
            TileRenderer(Camera(4, 4, 1.0), scene).render()
        assert any("no lights" in record.getMessage() for record in caplog.records)
