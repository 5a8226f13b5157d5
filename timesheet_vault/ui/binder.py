"""
Wires the presentation surface to the auth controller and upload pipeline.
"""

import structlog

from timesheet_vault.exceptions import (
    AuthorizationFailedError,
    AuthorizationRequiredError,
    SaveInProgressError,
    UninitializedError,
    ValidationError,
    VaultError,
)
from timesheet_vault.models.auth import AuthState
from timesheet_vault.models.drive import RemoteFile
from timesheet_vault.services.auth_service import AuthController
from timesheet_vault.services.upload_service import UploadPipeline
from timesheet_vault.ui.view import StatusClass, TimesheetView

logger = structlog.get_logger(__name__)

MSG_AUTHORIZED = "✅ Authorized to save data."
MSG_AUTH_FAILED = "❌ Authorization Failed."
MSG_LOADING = "System loading... please wait a moment and try again."
MSG_SIGNED_OUT = "Signed out. Please authorize again to save data."
MSG_PROCESSING = "Processing... Please wait."
MSG_SAVED = "✅ Data saved successfully to Google Drive!"
MSG_MISSING_FIELDS = "❌ Please fill in all fields (Name, Shift, Hours, and Encryption Key)."
MSG_REAUTHORIZE = "❌ Your Google authorization has expired. Please sign out and authorize again."
MSG_BUSY = "❌ A save is already in progress. Please wait for it to finish."


class UIBinder:
    """
    Reflects authorization state into the view and handles button presses.

    No error escapes a handler: each one ends in a status message and the
    view stays usable.
    """

    def __init__(
        self,
        view: TimesheetView,
        auth: AuthController,
        pipeline: UploadPipeline,
    ) -> None:
        self._view = view
        self._auth = auth
        self._pipeline = pipeline

    def bind(self) -> None:
        """Subscribe to auth transitions and render the current state."""
        self._auth.subscribe(self.render)
        self.render(self._auth.state, None)

    def unbind(self) -> None:
        self._auth.unsubscribe(self.render)

    def render(self, state: AuthState, error: VaultError | None = None) -> None:
        if isinstance(error, AuthorizationFailedError):
            self._view.set_status(MSG_AUTH_FAILED, StatusClass.ERROR)
            return

        if state is AuthState.UNINITIALIZED:
            return

        authorized = state is AuthState.AUTHORIZED
        self._view.set_authorize_visible(not authorized)
        self._view.set_instructions_visible(not authorized)
        self._view.set_sign_out_visible(authorized)
        self._view.set_form_visible(authorized)
        if authorized:
            self._view.set_status(MSG_AUTHORIZED, StatusClass.SUCCESS)

    async def on_authorize_clicked(self) -> None:
        try:
            await self._auth.request_authorization()
        except UninitializedError:
            logger.warning("Authorize clicked before initialization")
            self._view.set_status(MSG_LOADING, StatusClass.NEUTRAL)
        except AuthorizationFailedError as e:
            # Status already set by render()
            logger.debug("Authorization refused", reason=e.reason)
        except VaultError as e:
            logger.warning("Authorization flow failed", error_type=type(e).__name__)
            self._view.set_status(MSG_AUTH_FAILED, StatusClass.ERROR)

    async def on_sign_out_clicked(self) -> None:
        if self._auth.current_token() is None:
            return
        await self._auth.sign_out()
        self._view.set_status(MSG_SIGNED_OUT, StatusClass.NEUTRAL)

    async def on_save_clicked(self) -> RemoteFile | None:
        self._view.set_status(MSG_PROCESSING, StatusClass.NEUTRAL)
        try:
            remote = await self._pipeline.save(
                name=self._view.read_name(),
                shift=self._view.read_shift(),
                hours=self._view.read_hours(),
                password=self._view.read_password(),
            )
        except ValidationError as e:
            logger.debug("Save rejected", missing_fields=e.missing_fields)
            self._view.set_status(MSG_MISSING_FIELDS, StatusClass.ERROR)
            return None
        except AuthorizationRequiredError:
            logger.warning("Save needs a fresh authorization")
            self._view.set_status(MSG_REAUTHORIZE, StatusClass.ERROR)
            return None
        except SaveInProgressError:
            self._view.set_status(MSG_BUSY, StatusClass.ERROR)
            return None
        except VaultError as e:
            logger.error("Save failed", error_type=type(e).__name__, error=str(e))
            self._view.set_status(
                f"❌ Error saving data: {e.message}. Please try again.", StatusClass.ERROR
            )
            return None

        self._view.set_status(MSG_SAVED, StatusClass.SUCCESS)
        self._view.clear_name()
        self._view.clear_hours()
        return remote
