import pytest

from timesheet_vault.config import DRIVE_FILE_SCOPE, VaultConfig


def test_defaults_target_attendance_folder() -> None:
    config = VaultConfig(client_id="abc")

    assert config.scope == DRIVE_FILE_SCOPE
    assert config.folder_name == "HR_Attendance_Data"
    assert config.file_prefix == "attendance_entry_"
    assert config.file_extension == ".vocos"
    assert config.file_mime_type == "text/plain"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"client_id": ""},
        {"client_id": "abc", "folder_name": ""},
        {"client_id": "abc", "timeout": 0},
        {"client_id": "abc", "authorization_timeout": -1},
        {"client_id": "abc", "redirect_port": 70000},
    ],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        VaultConfig(**kwargs)


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMESHEET_VAULT_CLIENT_ID", "env-client")
    monkeypatch.setenv("TIMESHEET_VAULT_FOLDER", "Other_Folder")
    monkeypatch.setenv("TIMESHEET_VAULT_REDIRECT_PORT", "8765")
    monkeypatch.delenv("TIMESHEET_VAULT_CLIENT_SECRET", raising=False)
    monkeypatch.delenv("TIMESHEET_VAULT_TIMEOUT", raising=False)

    config = VaultConfig.from_env()

    assert config.client_id == "env-client"
    assert config.client_secret is None
    assert config.folder_name == "Other_Folder"
    assert config.redirect_port == 8765


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TIMESHEET_VAULT_CLIENT_ID", "env-client")
    monkeypatch.delenv("TIMESHEET_VAULT_FOLDER", raising=False)

    config = VaultConfig.from_env(client_id="flag-client", folder_name=None)

    assert config.client_id == "flag-client"
    assert config.folder_name == "HR_Attendance_Data"


def test_from_env_without_client_id_fails(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("TIMESHEET_VAULT_CLIENT_ID", raising=False)

    with pytest.raises(ValueError, match="client_id"):
        VaultConfig.from_env()
