"""
Bills list controller.

Fetches the bills of the current user, orders them from the most recent,
renders the loading/error/data state of the bills page, and handles the
"new bill" button and the receipt preview icons.
"""

from billed_ui.components.bills_ui import (
    MODAL_BODY_ID,
    MODAL_ID,
    build_bills_page,
    build_receipt_preview,
)
from billed_ui.layout import CONTENT_ID
from billed_ui.lib import logs
from billed_ui.models.bill import Bill
from billed_ui.models.common import Data, Error, Loading, RenderState
from billed_ui.routes import ROUTES_PATH, NavigationContext
from billed_ui.services.store import Store
from billed_ui.utils import sort_bills
from billed_ui.view import ViewHandle

LOG = logs.logger(__file__)

# Width in pixels of the receipt preview
PREVIEW_WIDTH = 500


class Bills:
    """
    Controller of the bills page.

    Args:
        view: Handle of the mounted view.
        context: Navigation context of the router.
        store: Remote store, or None when no data should be fetched.
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
        self.state: RenderState = Loading()
        self._token = view.generation
        self._bind()

    async def get_bills(self) -> list[Bill]:
        """
        Fetch the bills and return them in display order.

        Raises:
            StoreError: The store rejected the request.
        """
        bills = await self.store.bills().list()
        LOG.info("Fetched %s bills", len(bills))
        return sort_bills(bills)

    async def retrieve_and_render(self) -> RenderState:
        """
        Fetch the bills and render the outcome.

        Success renders Data, any failure renders Error with the failure's
        message. Nothing is retried.

        Returns:
            The rendered state.
        """
        if self.store is None:
            return self.state
        try:
            state: RenderState = Data(tuple(await self.get_bills()))
        except Exception as e:
            LOG.error("Failed to fetch bills: %s", e, exc_info=True)
            state = Error(str(e))
        self.render(state)
        return state

    def render(self, state: RenderState) -> None:
        """Render a state into the content area, if the view is still mounted."""
        self.state = state
        if not self.view.is_current(self._token):
            LOG.info("Bills view was replaced, skipping render")
            return
        if self.view.query(CONTENT_ID) is None:
            LOG.warning("No content area to render bills into")
            return
        self.view.replace(CONTENT_ID, build_bills_page(**state.to_render_kwargs()))
        self._bind()

    def handle_click_new_bill(self, *_) -> None:
        """Navigate to the new bill form."""
        self.context.on_navigate(ROUTES_PATH["NewBill"])

    def handle_click_icon_eye(self, icon) -> None:
        """
        Show the receipt of the clicked row in the preview modal.

        A missing receipt URL shows a placeholder instead of an image.
        """
        if not self.view.is_current(self._token):
            return
        url = getattr(icon, "data-bill-url", None) if icon is not None else None
        if self.view.query(MODAL_BODY_ID) is None:
            LOG.warning("No preview modal to show %s in", url)
            return
        self.view.replace(MODAL_BODY_ID, build_receipt_preview(url, PREVIEW_WIDTH))
        self.view.show_modal(MODAL_ID)

    def _bind(self) -> None:
        self.view.bind("btn-new-bill", "click", self.handle_click_new_bill)
        for icon in self.view.query_all("icon-eye"):
            self.view.bind(
                icon, "click", lambda _, icon=icon: self.handle_click_icon_eye(icon)
            )
