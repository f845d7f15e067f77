"""
Settings tests
"""

from mathitem.config import AppSettings


class TestAppSettings:
    def test_defaults(self):
        """Defaults match the documented values"""
        settings = AppSettings()
        assert settings.em_size == 16.0
        assert settings.scale == 1.0
        assert settings.process_escapes is True
        assert settings.error_class == "mathitem-error"

    def test_environment_override(self, monkeypatch):
        """MATHITEM_ environment variables override defaults"""
        monkeypatch.setenv("MATHITEM_EM_SIZE", "20")
        monkeypatch.setenv("MATHITEM_PROCESS_ESCAPES", "false")
        settings = AppSettings()
        assert settings.em_size == 20.0
        assert settings.process_escapes is False

    def test_display_flag_for_delimiters(self):
        """Delimiter pairs map to display, inline or unknown"""
        settings = AppSettings()
        assert settings.displayFlag_forDelims("$$", "$$") is True
        assert settings.displayFlag_forDelims("\\[", "\\]") is True
        assert settings.displayFlag_forDelims("$", "$") is False
        assert settings.displayFlag_forDelims("\\(", "\\)") is False
        assert settings.displayFlag_forDelims("", "") is None
