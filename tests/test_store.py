"""
tests/test_store.py – Unit tests for CanteenStore on an in-memory database.
"""
import pytest

from canteen_api.core.access import Role
from canteen_api.core.errors import InvalidRequest
from canteen_api.core.lifecycle import OrderStatus
from canteen_api.models import LineItem, MenuItem, UserCreateRequest

from conftest import make_order


class TestSeed:

    def test_not_empty_after_seed(self, store):
        assert store.is_empty() is False

    @pytest.mark.asyncio
    async def test_demo_canteens(self, store):
        canteens = await store.list_canteens()
        assert [c.id for c in canteens] == ["block1", "block5", "oat", "aavin"]
        assert await store.count_canteens() == 4

    @pytest.mark.asyncio
    async def test_menu_counts(self, store):
        counts = {c.id: c.menu_count for c in await store.canteens_with_menu_count()}
        assert counts == {"block1": 2, "block5": 1, "oat": 1, "aavin": 1}


class TestUsers:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("identifier", ["student@svce.edu", "22CSE001"])
    async def test_find_by_email_or_college_id(self, store, identifier):
        user, password_hash = await store.find_credentials(identifier)
        assert user.id == "stu-1"
        assert user.role is Role.STUDENT
        assert password_hash.startswith("$2")

    @pytest.mark.asyncio
    async def test_unknown_identifier(self, store):
        assert await store.find_credentials("nobody@svce.edu") is None

    @pytest.mark.asyncio
    async def test_create_and_list(self, store):
        req = UserCreateRequest(name="Meena", email="meena@svce.edu", college_id="STAFF202",
                                role="staff", password="x", canteen_id="block5")
        user = await store.create_user("staff-2", req, "hash")
        assert user.canteen_id == "block5"
        assert "staff-2" in [u.id for u in await store.list_users()]

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, store):
        req = UserCreateRequest(name="Dup", email="student@svce.edu", role="student", password="x")
        with pytest.raises(InvalidRequest):
            await store.create_user("dup", req, "hash")


class TestMenu:

    @pytest.mark.asyncio
    async def test_filter_by_canteen(self, store):
        items = await store.list_menu("block1")
        assert [i.id for i in items] == ["m1", "m2"]
        assert len(await store.list_menu()) == 5

    @pytest.mark.asyncio
    async def test_add_update_delete(self, store):
        await store.add_menu_item(MenuItem(id="m9", canteen_id="oat", name="Puff", price=25, available=True))
        updated = await store.update_menu_item("m9", {"price": 28, "available": False, "bogus": 1})
        assert updated.price == 28
        assert updated.available is False

        assert await store.delete_menu_item("m9") is True
        assert await store.get_menu_item("m9") is None
        assert await store.delete_menu_item("m9") is False

    @pytest.mark.asyncio
    async def test_update_missing(self, store):
        assert await store.update_menu_item("nope", {"price": 1}) is None


class TestOrders:

    @pytest.mark.asyncio
    async def test_add_and_get_keeps_lines(self, store):
        order = make_order(items=[
            LineItem(menu_id="m1", name="Idli (2 pcs)", quantity=2, price=30),
            LineItem(menu_id="m2", name="Masala Dosa", quantity=1, price=55),
        ], total=115)
        await store.add_order(order)

        loaded = await store.get_order("o-1")
        assert loaded == order
        assert [l.menu_id for l in loaded.items] == ["m1", "m2"]

    @pytest.mark.asyncio
    async def test_find_by_token(self, store):
        await store.add_order(make_order(numeric_token="654321"))
        assert (await store.find_order_by_token("654321")).id == "o-1"
        assert await store.find_order_by_token("000000") is None

    @pytest.mark.asyncio
    async def test_list_filters(self, store):
        await store.add_order(make_order(id="a", student_id="stu-1", canteen_id="block1", numeric_token="111111"))
        await store.add_order(make_order(id="b", student_id="stu-2", canteen_id="block5", numeric_token="222222"))
        assert [o.id for o in await store.list_orders()] == ["a", "b"]
        assert [o.id for o in await store.list_orders(student_id="stu-2")] == ["b"]
        assert [o.id for o in await store.list_orders(canteen_id="block1")] == ["a"]

    @pytest.mark.asyncio
    async def test_status_and_feedback(self, store):
        await store.add_order(make_order())
        updated = await store.set_order_status("o-1", OrderStatus.PREPARING)
        assert updated.status is OrderStatus.PREPARING
        updated = await store.set_feedback("o-1", "Tasty")
        assert updated.feedback == "Tasty"
        assert updated.status is OrderStatus.PREPARING

    @pytest.mark.asyncio
    async def test_update_missing_order(self, store):
        assert await store.set_order_status("nope", OrderStatus.READY) is None
