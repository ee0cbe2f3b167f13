import warnings

from app.core.config import Settings


def test_settings_are_read_from_the_environment(monkeypatch):
    monkeypatch.setenv("SESSION_EXPIRE_MINUTES", "15")
    monkeypatch.setenv("REVOKE_SESSIONS_ON_PASSWORD_RESET", "false")
    monkeypatch.setenv("SOME_UNRELATED_VARIABLE", "ignored")

    with warnings.catch_warnings():
        warnings.simplefilter("error")
        settings = Settings(_env_file=None)

    assert settings.SESSION_EXPIRE_MINUTES == 15
    assert settings.REVOKE_SESSIONS_ON_PASSWORD_RESET is False
    assert settings.OTP_MAX_ATTEMPTS == 5


def test_names_are_case_sensitive(monkeypatch):
    monkeypatch.setenv("otp_max_attempts", "9")

    assert Settings(_env_file=None).OTP_MAX_ATTEMPTS == 5
