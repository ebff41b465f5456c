"""Tests for the order status lifecycle."""

import pytest

from models.order import OrderStatus
from services import errors
from services import orders as order_service

P, PR, S, D, C = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
    OrderStatus.CANCELLED,
)

ALLOWED = {(P, PR), (PR, S), (S, D), (P, C), (PR, C)}


@pytest.mark.parametrize("current", list(OrderStatus))
@pytest.mark.parametrize("target", list(OrderStatus))
def test_transition_table(current, target):
    assert order_service.can_transition(current, target) == ((current, target) in ALLOWED)


@pytest.fixture
def user(make_user):
    return make_user()


@pytest.fixture
def place(db, make_product, fill_cart):
    def _place(owner):
        fill_cart(owner, (make_product(stock=10), 1))
        return order_service.place_order(db, owner.id, "1 Main St", "Credit Card")

    return _place


class TestUpdateStatus:
    def test_full_forward_path(self, db, user, place):
        order = place(user)
        for target in ("Processing", "Shipped", "Delivered"):
            order = order_service.update_status(db, order.id, target, user)
            assert order.status == target

    @pytest.mark.parametrize("path", [["Cancelled"], ["Processing", "Cancelled"]])
    def test_cancel_before_shipping(self, db, user, place, path):
        order = place(user)
        for target in path:
            order = order_service.update_status(db, order.id, target, user)
        assert order.status == "Cancelled"

    def test_skipping_a_state_is_rejected(self, db, user, place):
        order = place(user)
        with pytest.raises(errors.InvalidTransition) as exc:
            order_service.update_status(db, order.id, "Shipped", user)
        assert (exc.value.from_status, exc.value.to_status) == ("Pending", "Shipped")
        db.refresh(order)
        assert order.status == "Pending"

    def test_cannot_cancel_after_shipping(self, db, user, place):
        order = place(user)
        order_service.update_status(db, order.id, "Processing", user)
        order_service.update_status(db, order.id, "Shipped", user)
        with pytest.raises(errors.InvalidTransition):
            order_service.update_status(db, order.id, "Cancelled", user)

    @pytest.mark.parametrize("terminal", ["Delivered", "Cancelled"])
    def test_terminal_states_are_final(self, db, user, place, terminal):
        order = place(user)
        path = ["Processing", "Shipped", "Delivered"] if terminal == "Delivered" else ["Cancelled"]
        for target in path:
            order_service.update_status(db, order.id, target, user)
        for target in ("Pending", "Processing", "Shipped", "Delivered", "Cancelled"):
            with pytest.raises(errors.InvalidTransition):
                order_service.update_status(db, order.id, target, user)

    def test_moving_backwards_is_rejected(self, db, user, place):
        order = place(user)
        order_service.update_status(db, order.id, "Processing", user)
        with pytest.raises(errors.InvalidTransition):
            order_service.update_status(db, order.id, "Pending", user)

    def test_unknown_status_value(self, db, user, place):
        order = place(user)
        with pytest.raises(errors.ValidationError) as exc:
            order_service.update_status(db, order.id, "Lost", user)
        assert exc.value.field == "status"

    def test_other_users_order_is_not_found(self, db, make_user, place):
        owner, stranger = make_user(), make_user()
        order = place(owner)
        with pytest.raises(errors.OrderNotFound):
            order_service.update_status(db, order.id, "Processing", stranger)

    def test_admin_may_update_any_order(self, db, make_user, place):
        owner = make_user()
        admin = make_user(role="admin")
        order = place(owner)
        assert order_service.update_status(db, order.id, "Processing", admin).status == "Processing"

    def test_unknown_order(self, db, user):
        with pytest.raises(errors.OrderNotFound):
            order_service.update_status(db, 999, "Processing", user)


class TestListOrders:
    def test_newest_first_and_scoped_to_user(self, db, make_user, place):
        alice, bob = make_user(), make_user()
        first = place(alice)
        place(bob)
        second = place(alice)

        assert [o.id for o in order_service.list_orders(db, alice.id)] == [second.id, first.id]
