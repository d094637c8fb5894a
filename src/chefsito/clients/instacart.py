"""
Chefsito - Grocery Handoff Client.

Creates Instacart shopping-list and recipe pages for the ingredients a
user is missing, and looks up nearby retailers.

Docs: https://docs.instacart.com/developer_platform_api/

Failures come back as error responses rather than exceptions, so the
caller can show the message next to the "shop ingredients" button.
"""

import logging

import httpx

from chefsito.clients.http import DEFAULT_TIMEOUT, upstream_message
from chefsito.config import settings
from chefsito.models.instacart import (
    CreateRecipePageRequest,
    CreateShoppingListRequest,
    InstacartLineItem,
    InstacartLinkResponse,
    NearbyRetailersResponse,
)
from chefsito.models.recipe import Recipe

logger = logging.getLogger(__name__)

PRODUCTION_URL = "https://connect.instacart.com"
DEVELOPMENT_URL = "https://connect.dev.instacart.tools"
PRODUCTS_LINK_PATH = "/idp/v1/products/products_link"
RETAILERS_PATH = "/idp/v1/retailers"

ALL_INGREDIENTS_AVAILABLE = "You already have all the ingredients for this recipe!"


class InstacartClient:
    """Async client for the grocery handoff API."""

    def __init__(
        self,
        api_key: str | None = None,
        http_client: httpx.AsyncClient | None = None,
        use_production: bool | None = None,
    ):
        self._api_key = api_key
        self._http = http_client
        self._owns_http = http_client is None
        self._use_production = use_production

    @property
    def api_key(self) -> str:
        if self._api_key is None:
            self._api_key = settings.require_api_key("instacart")
        return self._api_key

    @property
    def base_url(self) -> str:
        use_production = self._use_production
        if use_production is None:
            use_production = settings.instacart_use_production
        return PRODUCTION_URL if use_production else DEVELOPMENT_URL

    def _headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

    def _client(self) -> httpx.AsyncClient:
        if self._http is None:
            self._http = httpx.AsyncClient(timeout=DEFAULT_TIMEOUT)
        return self._http

    async def aclose(self) -> None:
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None

    async def __aenter__(self) -> "InstacartClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _create_link(self, body: dict, default_error: str) -> InstacartLinkResponse:
        try:
            response = await self._client().post(
                f"{self.base_url}{PRODUCTS_LINK_PATH}",
                headers=self._headers(),
                json=body,
            )
        except httpx.HTTPError as e:
            logger.error(f"Instacart request failed: {e}")
            return InstacartLinkResponse.failure(f"Failed to connect to Instacart: {e}")

        logger.debug(f"Instacart products_link response: {response.status_code}")
        if response.status_code in (200, 201):
            try:
                return InstacartLinkResponse.from_json(response.json())
            except ValueError:
                return InstacartLinkResponse.failure(default_error)
        return InstacartLinkResponse.failure(upstream_message(response) or default_error)

    async def create_shopping_list(
        self,
        title: str,
        items: list[InstacartLineItem],
        image_url: str | None = None,
    ) -> InstacartLinkResponse:
        """Create a shopping list page; the returned URL opens it on Instacart."""
        request = CreateShoppingListRequest(title=title, line_items=items, image_url=image_url)
        return await self._create_link(request.to_json(), "Failed to create shopping list")

    async def create_shopping_list_from_ingredients(
        self,
        title: str,
        ingredients: list[str],
        image_url: str | None = None,
    ) -> InstacartLinkResponse:
        """Shopping list from bare ingredient names (no measurements)."""
        items = [InstacartLineItem(name=name, display_text=name) for name in ingredients]
        return await self.create_shopping_list(title, items, image_url)

    async def create_recipe_page(
        self,
        recipe: Recipe,
        only_missing_ingredients: bool = True,
    ) -> InstacartLinkResponse:
        """
        Create a recipe page with shoppable ingredients.

        By default only ingredients the user doesn't have are included.
        """
        to_shop = [
            i for i in recipe.ingredients if not (only_missing_ingredients and i.is_available)
        ]
        logger.info(
            f"Shopping for {len(to_shop)} of {len(recipe.ingredients)} ingredients "
            f"(missing only: {only_missing_ingredients})"
        )
        if not to_shop:
            return InstacartLinkResponse.failure(ALL_INGREDIENTS_AVAILABLE)

        request = CreateRecipePageRequest(
            title=recipe.name,
            line_items=[
                InstacartLineItem.from_ingredient(
                    name=i.name,
                    quantity=i.quantity,
                    unit=i.unit,
                    display_text=i.formatted,
                )
                for i in to_shop
            ],
            image_url=recipe.image_url,
            servings=recipe.servings,
            prep_time=recipe.total_time_minutes,
            instructions=recipe.instructions,
        )
        return await self._create_link(request.to_json(), "Failed to create recipe page")

    async def get_nearby_retailers(
        self,
        postal_code: str,
        country_code: str = "US",
    ) -> NearbyRetailersResponse:
        try:
            response = await self._client().get(
                f"{self.base_url}{RETAILERS_PATH}",
                headers=self._headers(),
                params={"postal_code": postal_code, "country_code": country_code},
            )
        except httpx.HTTPError as e:
            logger.error(f"Instacart retailers request failed: {e}")
            return NearbyRetailersResponse.failure(f"Failed to connect to Instacart: {e}")

        if response.status_code != 200:
            return NearbyRetailersResponse.failure("Failed to fetch retailers")
        try:
            result = NearbyRetailersResponse.from_json(response.json())
        except ValueError:
            return NearbyRetailersResponse.failure("Failed to fetch retailers")

        logger.info(f"Found {len(result.retailers)} retailers near {postal_code}")
        return result
