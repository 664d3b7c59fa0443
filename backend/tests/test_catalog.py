"""
Tests for catalog maintenance: category detail presets and product edits.
"""
import pytest

from threadcart.core.exceptions import InvalidArgumentError, NotFoundError
from threadcart.schemas.product import ProductCreate, ProductUpdate
from threadcart.services.catalog_service import (
    REQUIRED_DETAIL_FIELDS,
    build_product,
    default_details,
    merge_details,
)
from factories import make_product


def _create_request(**overrides) -> ProductCreate:
    data = {
        "name": "Classic Crew Tee",
        "description": "Soft cotton",
        "category": "Tshirt",
        "gender": "Unisex",
        "price": 599.0,
        "stock": 40,
        "size": ["M", "L"],
        "color": ["black"],
        "images": ["tee.jpg"],
    }
    data.update(overrides)
    return ProductCreate.model_validate(data)


class TestCategoryDetails:

    def test_preset_has_every_required_field(self):
        for category in ("Hoodies", "Tshirt", "Couple-Tshirt", "Oversize-Tshirt"):
            details = default_details(category)
            assert all(details.get(field) for field in REQUIRED_DETAIL_FIELDS), category

    def test_category_without_preset(self):
        assert default_details("Polo-Tshirt") == {}

    def test_build_product_fills_preset(self):
        product = build_product(_create_request())

        assert product.category == "Tshirt"
        assert product.size == ["M", "L"]
        assert product.details["neck"] == "Round Neck"

    def test_request_details_override_preset(self):
        product = build_product(_create_request(details={"neck": "V Neck"}))

        assert product.details["neck"] == "V Neck"
        assert product.details["sleeve"] == "Half Sleeve"

    def test_merge_details(self):
        merged = merge_details(default_details("Hoodies"), {"styleCode": "Blue"})
        assert merged["styleCode"] == "Blue"

    def test_merge_details_requires_fields(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            merge_details({}, {"material": "Cotton"})

        assert "careInstructions" in exc_info.value.message
        assert "material" not in exc_info.value.message


class TestCatalogService:

    @pytest.mark.asyncio
    async def test_add_product(self, catalog_service, mock_catalog):
        product = await catalog_service.add_product(_create_request())

        assert product.id == "new_product"
        mock_catalog.insert.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_sends_only_given_fields(self, catalog_service, mock_catalog):
        await catalog_service.update_product("prod_tee", ProductUpdate(price=450.0, stock=3))

        product_id, fields = mock_catalog.update.await_args.args
        assert product_id == "prod_tee"
        assert fields == {"price": 450.0, "stock": 3}

    @pytest.mark.asyncio
    async def test_update_without_fields(self, catalog_service):
        with pytest.raises(InvalidArgumentError):
            await catalog_service.update_product("prod_tee", ProductUpdate())

    @pytest.mark.asyncio
    async def test_update_missing_product(self, catalog_service, mock_catalog):
        mock_catalog.update.return_value = None

        with pytest.raises(NotFoundError):
            await catalog_service.update_product("prod_tee", ProductUpdate(price=450.0))

    @pytest.mark.asyncio
    async def test_update_details_merges_stored_map(self, catalog_service, mock_catalog):
        stored = make_product()
        stored.details = default_details("Tshirt")
        mock_catalog.find_by_id.return_value = stored

        await catalog_service.update_product_details("prod_tee", {"pattern": "Striped"})

        fields = mock_catalog.update.await_args.args[1]
        assert fields["details"]["pattern"] == "Striped"
        assert fields["details"]["fabric"] == "Platinum Soft Cotton"

    @pytest.mark.asyncio
    async def test_delete_missing_product(self, catalog_service, mock_catalog):
        mock_catalog.delete.return_value = False

        with pytest.raises(NotFoundError):
            await catalog_service.delete_product("prod_tee")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
