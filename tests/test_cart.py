"""Tests for cart assembly and the add-or-increment merge."""
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

from database import Base, make_engine, make_session_factory
from schemas.product import ProductCreate, ProductUpdate
from schemas.user import UserInsert
from storage import DatabaseStorage


class TestCartMerge:

    def test_repeat_adds_merge_into_one_line(self, store, make_user, make_product):
        user = make_user()
        product = make_product()

        store.add_to_cart(user.id, product.id, 2)
        item = store.add_to_cart(user.id, product.id, 3)

        lines = store.get_cart_items(user.id)
        assert len(lines) == 1
        assert lines[0].id == item.id
        assert lines[0].quantity == 5

    def test_default_quantity_is_one(self, store, make_user, make_product):
        user = make_user()
        product = make_product()

        item = store.add_to_cart(user.id, product.id)

        assert item.quantity == 1

    def test_locking_merge_without_upsert_support(self, store, make_user, make_product, monkeypatch):
        # Dialects without ON CONFLICT take the SELECT ... FOR UPDATE path
        monkeypatch.setattr(store, "_dialect", lambda db: "mssql")
        user = make_user()
        product = make_product()

        first = store.add_to_cart(user.id, product.id, 2)
        second = store.add_to_cart(user.id, product.id, 3)

        assert second.id == first.id
        assert second.quantity == 5
        assert [(l.product_id, l.quantity) for l in store.get_cart_items(user.id)] == [(product.id, 5)]

    def test_carts_are_per_user(self, store, make_user, make_product):
        alice, bob = make_user(), make_user()
        product = make_product()

        store.add_to_cart(alice.id, product.id, 1)
        store.add_to_cart(bob.id, product.id, 4)

        assert [l.quantity for l in store.get_cart_items(alice.id)] == [1]
        assert [l.quantity for l in store.get_cart_items(bob.id)] == [4]

    def test_concurrent_adds_keep_every_increment(self, tmp_path):
        # Real connections per thread need a file database
        engine = make_engine(f"sqlite:///{tmp_path / 'cart.db'}")
        Base.metadata.create_all(bind=engine)
        shared = DatabaseStorage(make_session_factory(engine))

        user = shared.create_user(UserInsert(username="racer", email="racer@example.com", password="x"))
        product = shared.create_product(ProductCreate(name="Ball", slug="ball", price=Decimal("1.00")))

        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(lambda _: shared.add_to_cart(user.id, product.id, 1), range(20)))

        lines = shared.get_cart_items(user.id)
        assert len(lines) == 1
        assert lines[0].quantity == 20
        engine.dispose()


class TestCartLines:

    def test_lines_embed_current_product(self, store, make_user, make_product):
        user = make_user()
        product = make_product(name="Kettle", price="30.00")
        store.add_to_cart(user.id, product.id, 1)

        store.update_product(product.id, ProductUpdate(name="Steel Kettle"))

        line = store.get_cart_items(user.id)[0]
        assert line.product.id == product.id
        assert line.product.name == "Steel Kettle"

    def test_update_sets_absolute_quantity(self, store, make_user, make_product):
        user = make_user()
        item = store.add_to_cart(user.id, make_product().id, 5)

        updated = store.update_cart_item(item.id, 2)

        assert updated.quantity == 2
        assert store.get_cart_items(user.id)[0].quantity == 2

    def test_update_missing_line_is_none(self, store):
        assert store.update_cart_item(77, 3) is None

    def test_remove_is_idempotent(self, store, make_user, make_product):
        user = make_user()
        item = store.add_to_cart(user.id, make_product().id)

        store.remove_from_cart(item.id)
        store.remove_from_cart(item.id)

        assert store.get_cart_items(user.id) == []

    def test_clear_only_touches_one_user(self, store, make_user, make_product):
        alice, bob = make_user(), make_user()
        p1, p2 = make_product(), make_product()
        store.add_to_cart(alice.id, p1.id)
        store.add_to_cart(alice.id, p2.id)
        store.add_to_cart(bob.id, p1.id)

        store.clear_cart(alice.id)

        assert store.get_cart_items(alice.id) == []
        assert len(store.get_cart_items(bob.id)) == 1

    def test_deleted_product_drops_out_of_cart(self, store, make_user, make_product):
        user = make_user()
        kept, gone = make_product(), make_product()
        store.add_to_cart(user.id, kept.id)
        store.add_to_cart(user.id, gone.id)

        store.delete_product(gone.id)

        assert [l.product_id for l in store.get_cart_items(user.id)] == [kept.id]
