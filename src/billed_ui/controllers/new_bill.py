"""
New bill controller.

Validates the receipt picked in the file input, collects the form fields,
and submits the bill to the remote store in two awaited steps:

1. create(): registers the bill with its receipt and resolves the file URL
2. update(): stores the bill fields under the key returned by create()

A successful submission navigates back to the bills list. A failure is
shown above the send button and leaves the form as filled in, so the user
can submit again.
"""

from typing import Any

from billed_ui.components.new_bill_ui import FORM_ERROR_ID, build_form_error
from billed_ui.lib import logs
from billed_ui.models.bill import Bill, BillStatus, serialize_bill
from billed_ui.models.common import (
    Error,
    PendingUpload,
    RenderState,
    SubmissionStatus,
)
from billed_ui.routes import ROUTES_PATH, NavigationContext
from billed_ui.services.store import Store
from billed_ui.utils import file_extension
from billed_ui.view import FileChangeEvent, SubmitEvent, ViewHandle

LOG = logs.logger(__file__)

ACCEPTED_EXTENSIONS = frozenset({"jpg", "jpeg", "png"})
INVALID_FILE_MESSAGE = (
    "Veuillez télécharger un fichier avec une extension jpg, jpeg ou png."
)
DEFAULT_PCT = 20


class NewBill:
    """
    Controller of the new bill form.

    Args:
        view: Handle of the mounted view.
        context: Navigation context of the router.
        store: Remote store receiving the bill.
    """

    def __init__(
        self,
        view: ViewHandle,
        context: NavigationContext,
        store: Store | None,
    ) -> None:
        self.view = view
        self.context = context
        self.store = store
        self.upload: PendingUpload | None = None
        self.bill_id: str | None = None
        self.status = SubmissionStatus.IDLE
        self.state: RenderState | None = None
        self._token = view.generation
        view.bind("form-new-bill", "submit", self.handle_submit)
        view.bind("file", "change", self.handle_change_file)

    @property
    def file_url(self) -> str | None:
        return self.upload.file_url if self.upload else None

    @property
    def file_name(self) -> str | None:
        return self.upload.file_name if self.upload else None

    def handle_change_file(self, event: FileChangeEvent) -> bool:
        """
        Validate the selected receipt.

        Only jpg, jpeg and png files are kept, whatever the case of the
        extension. Any other file is dropped, the input is cleared and a
        blocking alert asks for a valid file.

        Returns:
            True when the file was accepted.
        """
        file = event.files[0] if event.files else None
        if file is None or file_extension(file.name) not in ACCEPTED_EXTENSIONS:
            LOG.info("Rejected receipt %s", file.name if file else None)
            self.upload = None
            self.status = SubmissionStatus.IDLE
            self._clear_input(event.target)
            self.view.alert(INVALID_FILE_MESSAGE)
            return False

        self.upload = PendingUpload(file=file, file_name=file.name)
        self.bill_id = None
        self.status = SubmissionStatus.FILE_SELECTED
        LOG.info("Selected receipt %s", file.name)
        return True

    async def handle_submit(self, event: SubmitEvent | None = None) -> SubmissionStatus:
        """
        Submit the bill.

        A submit arriving while another one is in flight is ignored.

        Returns:
            The submission status after this call.
        """
        if event is not None:
            event.prevent_default()
        if self.status is SubmissionStatus.SUBMITTING:
            LOG.warning("Submission already in progress, ignoring submit")
            return self.status

        self.status = SubmissionStatus.SUBMITTING
        email = self.context.email()
        fields = self._read_form()
        try:
            bills = self.store.bills()
            # A retry after a failed update reuses the bill already created
            if self.bill_id is None:
                created = await bills.create(
                    {"file": self.upload.file if self.upload else None, "email": email}
                )
                self.bill_id = created.get("key") or created.get("id")
                if self.upload is not None:
                    self.upload.file_url = created.get("fileUrl")
            bill = self._build_bill(fields, email)
            await bills.update(serialize_bill(bill, include_id=False), self.bill_id)
        except Exception as e:
            LOG.error("Failed to submit bill: %s", e, exc_info=True)
            self.status = SubmissionStatus.FAILED
            self.state = Error(str(e))
            self._render_error(str(e))
            return self.status

        LOG.info("Bill %s submitted", self.bill_id)
        self.status = SubmissionStatus.NAVIGATED
        self.context.on_navigate(ROUTES_PATH["Bills"])
        return self.status

    def upload_snapshot(self) -> dict | None:
        """Return the pending upload as a JSON-compatible dictionary."""
        return self.upload.to_dict() if self.upload else None

    def restore_upload(self, data: dict | None) -> None:
        """Restore a pending upload saved with upload_snapshot()."""
        self.upload = PendingUpload.from_dict(data)
        if self.upload is not None:
            self.status = SubmissionStatus.FILE_SELECTED

    def _read_form(self) -> dict[str, Any]:
        return {
            "type": self.view.value("expense-type"),
            "name": self.view.value("expense-name"),
            "amount": self.view.value("amount"),
            "date": self.view.value("datepicker"),
            "vat": self.view.value("vat"),
            "pct": self.view.value("pct"),
            "commentary": self.view.value("commentary"),
        }

    def _build_bill(self, fields: dict[str, Any], email: str) -> Bill:
        return Bill(
            id=None,
            email=email,
            type=fields["type"] or "",
            name=fields["name"] or "",
            amount=_to_number(fields["amount"]),
            date=fields["date"] or "",
            vat=fields["vat"] if fields["vat"] is not None else "",
            pct=_to_number(fields["pct"]) or DEFAULT_PCT,
            commentary=fields["commentary"] or "",
            file_url=self.file_url,
            file_name=self.file_name,
            status=BillStatus.PENDING.value,
        )

    def _clear_input(self, target) -> None:
        input_ = target if target is not None else self.view.query("file")
        if input_ is None:
            return
        for prop in ("value", "contents", "filename"):
            setattr(input_, prop, None)

    def _render_error(self, message: str) -> None:
        if not self.view.is_current(self._token):
            LOG.info("New bill view was replaced, skipping error render")
            return
        if self.view.query(FORM_ERROR_ID) is None:
            LOG.warning("No error area to show %r in", message)
            return
        self.view.replace(FORM_ERROR_ID, build_form_error(message))


def _to_number(value: Any) -> int | float | None:
    """Parse a numeric form value; blanks and garbage become None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    text = str(value).strip().replace(",", ".")
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else number
