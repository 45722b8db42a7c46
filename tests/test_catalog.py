"""Tests for category and product storage operations."""
from decimal import Decimal

import pytest

from schemas.category import CategoryCreate, CategoryUpdate
from schemas.product import ProductCreate, ProductUpdate
from storage import ConstraintViolation, InsufficientStock


class TestCategories:

    def test_categories_sorted_by_name(self, store, make_category):
        make_category("Toys")
        make_category("Books")
        make_category("Garden")

        assert [c.name for c in store.get_categories()] == ["Books", "Garden", "Toys"]

    def test_duplicate_slug_rejected(self, store, make_category):
        make_category("Books", slug="books")

        with pytest.raises(ConstraintViolation):
            store.create_category(CategoryCreate(name="More books", slug="books"))

    def test_partial_update_keeps_other_fields(self, store):
        category = store.create_category(CategoryCreate(name="Books", slug="books", description="Paper"))

        updated = store.update_category(category.id, CategoryUpdate(name="Novels"))

        assert updated.name == "Novels"
        assert updated.slug == "books"
        assert updated.description == "Paper"

    def test_update_missing_category_is_none(self, store):
        assert store.update_category(42, CategoryUpdate(name="x")) is None

    def test_delete_is_idempotent(self, store, make_category):
        category = make_category("Books")

        store.delete_category(category.id)
        store.delete_category(category.id)

        assert store.get_category_by_id(category.id) is None

    def test_delete_uncategorises_products(self, store, make_category, make_product):
        category = make_category("Books")
        product = make_product(category_id=category.id)

        store.delete_category(category.id)

        assert store.get_product_by_id(product.id).category_id is None


class TestProductListing:

    def test_inactive_products_never_listed(self, store, make_product):
        visible = make_product(name="Lamp", is_featured=True)
        make_product(name="Lamp Old", is_active=False, is_featured=True)

        assert [p.id for p in store.get_products()] == [visible.id]
        assert [p.id for p in store.get_products(search="lamp")] == [visible.id]
        assert [p.id for p in store.get_featured_products()] == [visible.id]

    def test_admin_listing_includes_inactive(self, store, make_product):
        make_product(is_active=True)
        make_product(is_active=False)

        assert len(store.get_all_products()) == 2

    def test_newest_first(self, store, make_product):
        first = make_product()
        second = make_product()
        third = make_product()

        assert [p.id for p in store.get_products()] == [third.id, second.id, first.id]

    def test_pagination_is_disjoint_and_ordered(self, store, make_product):
        created = [make_product() for _ in range(5)]

        page1 = store.get_products(limit=2, offset=0)
        page2 = store.get_products(limit=2, offset=2)

        ids = [p.id for p in page1 + page2]
        assert len(set(ids)) == 4
        assert ids == [p.id for p in reversed(created)][:4]

    def test_category_and_search_combine(self, store, make_category, make_product):
        books = make_category("Books")
        toys = make_category("Toys")
        wanted = make_product(name="Blue Notebook", category_id=books.id)
        make_product(name="Red Notebook", category_id=toys.id)
        make_product(name="Blue Pen", category_id=books.id)

        result = store.get_products(category_id=books.id, search="NOTEBOOK")

        assert [p.id for p in result] == [wanted.id]

    def test_search_treats_wildcards_literally(self, store, make_product):
        make_product(name="100% Cotton Shirt")
        make_product(name="Cotton Shirt")

        assert [p.name for p in store.get_products(search="100%")] == ["100% Cotton Shirt"]

    def test_featured_default_limit(self, store, make_product):
        for _ in range(10):
            make_product(is_featured=True)
        make_product(is_featured=False)

        assert len(store.get_featured_products()) == 8

    def test_default_page_size(self, store, make_product):
        for _ in range(25):
            make_product()

        assert len(store.get_products()) == 20


class TestProductWrites:

    def test_create_returns_defaults(self, store):
        product = store.create_product(ProductCreate(name="Mug", slug="mug", price=Decimal("7.50")))

        assert product.price == Decimal("7.50")
        assert product.stock == 0
        assert product.is_active is True
        assert product.is_featured is False
        assert product.review_count == 0
        assert product.created_at is not None

    def test_duplicate_slug_rejected(self, store, make_product):
        make_product(slug="mug")

        with pytest.raises(ConstraintViolation):
            make_product(slug="mug")

    def test_lookup_by_slug(self, store, make_product):
        product = make_product(slug="kettle")

        assert store.get_product_by_slug("kettle").id == product.id
        assert store.get_product_by_slug("missing") is None

    def test_partial_update(self, store, make_product):
        product = make_product(name="Mug", price="5.00", stock=3)

        updated = store.update_product(product.id, ProductUpdate(price=Decimal("6.25")))

        assert updated.price == Decimal("6.25")
        assert updated.name == "Mug"
        assert updated.stock == 3

    def test_update_to_taken_slug_rejected(self, store, make_product):
        make_product(slug="taken")
        product = make_product(slug="free")

        with pytest.raises(ConstraintViolation):
            store.update_product(product.id, ProductUpdate(slug="taken"))

    def test_update_missing_product_is_none(self, store):
        assert store.update_product(123, ProductUpdate(name="x")) is None

    def test_delete_is_idempotent(self, store, make_product):
        product = make_product()

        store.delete_product(product.id)
        store.delete_product(product.id)

        assert store.get_product_by_id(product.id) is None


class TestStock:

    def test_decrements_accumulate(self, store, make_product):
        product = make_product(stock=10)

        store.update_product_stock(product.id, 4)
        store.update_product_stock(product.id, 3)

        assert store.get_product_by_id(product.id).stock == 3

    def test_plain_decrement_can_go_negative(self, store, make_product):
        product = make_product(stock=2)

        store.update_product_stock(product.id, 5)

        assert store.get_product_by_id(product.id).stock == -3

    def test_reserve_refuses_to_oversell(self, store, make_product):
        product = make_product(stock=2)

        with pytest.raises(InsufficientStock) as exc:
            store.reserve_stock(product.id, 3)

        assert exc.value.product_id == product.id
        assert store.get_product_by_id(product.id).stock == 2

    def test_reserve_takes_exact_stock(self, store, make_product):
        product = make_product(stock=2)

        store.reserve_stock(product.id, 2)

        assert store.get_product_by_id(product.id).stock == 0
