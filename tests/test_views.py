"""
Tests for cart view consumers
"""

import pytest

from storefront.cart import Fulfillment
from storefront.cart.views import CartBadge, CartPage, CartSidebar, OrderSummary, project_summary


class TestCartBadge:
    """Tests for the header badge."""

    def test_badge_counts_units(self, store, jollof, suya):
        """Test the badge shows total units."""
        badge = CartBadge(store)
        store.add(jollof)
        store.add(jollof)
        store.add(suya)

        view = badge.render()
        assert view.item_count == 3
        assert view.visible is True

    def test_empty_badge_hidden(self, store):
        """Test an empty cart hides the badge."""
        assert CartBadge(store).render().visible is False

    def test_click_opens_panel(self, store):
        """Test clicking the badge opens the shared panel."""
        CartBadge(store).click()

        assert store.is_panel_open is True


class TestCartSidebar:
    """Tests for the slide-over panel."""

    def test_closed_sidebar_renders_nothing(self, store, jollof):
        """Test a closed panel carries no lines."""
        sidebar = CartSidebar(store)
        store.add(jollof)

        view = sidebar.render()
        assert view.is_open is False
        assert view.lines == []
        assert view.item_count == 1

    def test_open_sidebar_lists_lines(self, store, jollof, suya):
        """Test the open panel lists lines with pricing."""
        sidebar = CartSidebar(store)
        store.add(jollof)
        store.add(suya)
        store.open_panel()

        view = sidebar.render()
        assert view.is_open is True
        assert [line.id for line in view.lines] == ["jollof-rice", "suya"]
        assert view.lines[0].unit_price_display == "₦3,000"
        assert view.lines[1].image is None
        assert view.pricing.grand_total_display == "₦4,800"

    def test_open_empty_sidebar(self, store):
        """Test the empty state has no pricing block."""
        store.open_panel()
        view = CartSidebar(store).render()

        assert view.is_empty is True
        assert view.pricing is None

    def test_decrement_last_unit_removes(self, store, jollof):
        """Test decrementing a quantity-1 line removes it."""
        sidebar = CartSidebar(store)
        store.add(jollof)

        sidebar.decrement("jollof-rice")

        assert "jollof-rice" not in store.ledger
        assert store.item_count == 0

    def test_increment_and_decrement(self, store, jollof):
        """Test quantity controls route through the store."""
        sidebar = CartSidebar(store)
        store.add(jollof)

        sidebar.increment("jollof-rice")
        sidebar.increment("jollof-rice")
        sidebar.decrement("jollof-rice")

        assert store.ledger.get("jollof-rice").quantity == 2

    def test_close_and_checkout_close_panel(self, store):
        """Test close and checkout both hide the panel."""
        sidebar = CartSidebar(store)
        store.open_panel()
        sidebar.close()
        assert store.is_panel_open is False

        store.open_panel()
        sidebar.checkout()
        assert store.is_panel_open is False


class TestCartPage:
    """Tests for the dedicated cart page."""

    def test_heading_pluralization(self, store, jollof, suya):
        """Test the heading counts distinct lines."""
        page = CartPage(store)
        store.add(jollof)
        store.add(jollof)
        assert page.render().heading == "1 Item in Cart"

        store.add(suya)
        assert page.render().heading == "2 Items in Cart"

    def test_clear(self, store, jollof):
        """Test clearing from the page empties the cart."""
        page = CartPage(store)
        store.add(jollof)
        page.clear()

        view = page.render()
        assert view.is_empty is True
        assert view.pricing.grand_total == 0

    def test_remove(self, store, jollof, suya):
        """Test removing a line from the page."""
        page = CartPage(store)
        store.add(jollof)
        store.add(suya)
        page.remove("suya")

        assert [line.id for line in page.render().lines] == ["jollof-rice"]


class TestOrderSummary:
    """Tests for the order summary panel."""

    def test_summary_above_threshold(self, store, jollof):
        """Test summary figures for price 3000 × 2."""
        summary = OrderSummary(store)
        store.add(jollof)
        store.add(jollof)

        view = summary.render()
        assert view.lines[0].quantity_label == "×2"
        assert view.lines[0].line_total_display == "₦6,000"
        assert view.pricing.delivery_fee_display == "Free"
        assert view.pricing.tax_display == "₦450"
        assert view.pricing.tax_label == "Tax (7.5%)"
        assert view.pricing.grand_total_display == "₦6,450"
        assert view.free_delivery_applied is True

    def test_summary_below_threshold(self, store, suya):
        """Test summary figures for price 1000 × 1."""
        summary = OrderSummary(store)
        store.add(suya)

        view = summary.render()
        assert view.pricing.delivery_fee_display == "₦500"
        assert view.pricing.grand_total == 1575
        assert view.free_delivery_applied is False

    def test_pickup_summary(self, store, suya):
        """Test pickup waives delivery in the summary."""
        store.add(suya)
        view = OrderSummary(store, Fulfillment.PICKUP).render()

        assert view.pricing.delivery_fee == 0
        assert view.pricing.grand_total == 1075

    def test_empty_summary(self, store):
        """Test an empty cart summarizes to zero."""
        view = project_summary(store.snapshot())

        assert view.lines == []
        assert view.pricing.grand_total == 0
        assert view.free_delivery_applied is False


class TestSharedState:
    """Tests that every surface reflects the same store."""

    def test_all_views_stay_in_sync(self, store, jollof, suya):
        """Test a change through one view shows up in all of them."""
        badge = CartBadge(store)
        sidebar = CartSidebar(store)
        page = CartPage(store)
        summary = OrderSummary(store)
        store.open_panel()

        store.add(jollof)
        page.increment("jollof-rice")
        sidebar.remove("jollof-rice")
        store.add(suya)

        assert badge.render().item_count == 1
        assert [line.id for line in sidebar.render().lines] == ["suya"]
        assert [line.id for line in page.render().lines] == ["suya"]
        assert summary.render().pricing.grand_total == 1575

    def test_views_rerender_on_every_change(self, store, jollof):
        """Test each store change reaches subscribed views."""
        badge = CartBadge(store)
        store.add(jollof)
        store.open_panel()

        assert badge.renders == 2

    def test_detached_view_stops_updating(self, store, jollof):
        """Test detached views keep their last snapshot."""
        badge = CartBadge(store)
        badge.detach()
        store.add(jollof)

        assert badge.render().item_count == 0

    @pytest.mark.parametrize("view_cls", [CartBadge, CartSidebar, CartPage, OrderSummary])
    def test_views_hold_no_mutable_copy(self, store, jollof, view_cls):
        """Test views expose the store's own immutable ledger."""
        view = view_cls(store)
        store.add(jollof)

        assert view.snapshot.ledger is store.ledger
