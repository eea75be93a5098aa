# catalog_sync.services.shopify.client

import json
import logging
import asyncio
import httpx
from typing import Dict, List, Optional, Any

from catalog_sync.core.exceptions import ShopifyAPIError
from catalog_sync.core.config import Settings, get_settings
from catalog_sync.schemas.product import ProductPage, RemoteProduct

logger = logging.getLogger(__name__)


PRODUCTS_PAGE_QUERY = """
query getProducts($first: Int!, $after: String) {
  products(first: $first, after: $after) {
    edges {
      node {
        id
        title
        descriptionHtml
      }
      cursor
    }
    pageInfo {
      hasNextPage
      endCursor
    }
  }
}
"""


class ShopifyGraphQLError(ShopifyAPIError):
    """Raised when a GraphQL response carries an errors array."""
    def __init__(self, errors):
        self.errors = errors
        message = "GraphQL query failed with errors:\n"
        for error in errors:
            msg = error.get('message', 'Unknown error')
            path = error.get('path', [])
            message += f"- Message: {msg}, Path: {path}\n"
        super().__init__(message)


class ShopifyGraphQLClient:
    """
    Async client for the Shopify Admin GraphQL API, used as the remote
    listing collaborator of the bulk import.

    The client tracks Shopify's cost-based throttle from the `extensions`
    block of each response and waits before a request that would dip into
    the safety buffer. It does not retry failed requests: every failure is
    raised as ShopifyAPIError and the caller decides what to do.
    """

    def __init__(self, settings: Optional[Settings] = None, safety_buffer_percentage: float = 0.25):
        settings = settings or get_settings()
        self.admin_api_token = settings.SHOPIFY_ADMIN_API_ACCESS_TOKEN
        self.api_version = settings.SHOPIFY_API_VERSION
        self.timeout = settings.SHOPIFY_REQUEST_TIMEOUT

        if not self.admin_api_token:
            raise ValueError(
                "SHOPIFY_ADMIN_API_ACCESS_TOKEN must be set in .env or as an environment variable."
            )

        # Initialize throttle status - will be updated after the first call
        self.max_available_points = 1000.0
        self.currently_available_points = self.max_available_points
        self.restore_rate = 50.0
        self.safety_buffer_percentage = safety_buffer_percentage
        self.safety_buffer_points = self.max_available_points * safety_buffer_percentage

        logger.info(f"ShopifyGraphQLClient initialized (API version: {self.api_version})")

    def graphql_url(self, shop: str) -> str:
        return f"https://{shop}/admin/api/{self.api_version}/graphql.json"

    def _get_headers(self) -> Dict[str, str]:
        return {
            "X-Shopify-Access-Token": self.admin_api_token,
            "Content-Type": "application/json"
        }

    def _update_throttle_status(self, extensions):
        if extensions and "cost" in extensions:
            throttle = extensions["cost"].get("throttleStatus", {})
            self.max_available_points = float(throttle.get("maximumAvailable", self.max_available_points))
            self.currently_available_points = float(throttle.get("currentlyAvailable", self.currently_available_points))
            self.restore_rate = float(throttle.get("restoreRate", self.restore_rate))
            self.safety_buffer_points = self.max_available_points * self.safety_buffer_percentage

    async def _wait_for_capacity(self, estimated_cost: int):
        required_points = estimated_cost + self.safety_buffer_points
        if self.currently_available_points >= required_points:
            return

        points_needed = required_points - self.currently_available_points
        wait_time = (points_needed / self.restore_rate) if self.restore_rate > 0 else 10
        wait_time = max(wait_time, 0) + 0.5
        logger.info(
            f"Rate limit approaching: {self.currently_available_points} points available, "
            f"need ~{required_points}. Waiting {wait_time:.2f}s"
        )
        await asyncio.sleep(wait_time)
        # Optimistic; the next response reports the real figure
        self.currently_available_points = min(
            self.max_available_points,
            self.currently_available_points + self.restore_rate * wait_time
        )

    async def execute(self, shop: str, query: str, variables: Optional[dict] = None, estimated_cost: int = 10) -> Dict[str, Any]:
        """
        Run a GraphQL query against the shop and return its `data` block.

        Raises:
            ShopifyAPIError: network failure, non-2xx status or undecodable body
            ShopifyGraphQLError: the response carried GraphQL errors
        """
        await self._wait_for_capacity(estimated_cost)

        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        url = self.graphql_url(shop)
        logger.debug(f"POST {url} variables={variables}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, headers=self._get_headers(), json=payload)
        except httpx.RequestError as e:
            logger.error(f"Network error talking to {shop}: {str(e)}")
            raise ShopifyAPIError(f"Network error: {str(e)}") from e

        if response.status_code == 429:
            # Force the next call to wait for the bucket to refill
            self.currently_available_points = 0
            raise ShopifyAPIError(f"Throttled by Shopify (429): {response.text}")

        if response.status_code not in (200, 201):
            logger.error(f"Shopify API error {response.status_code}: {response.text}")
            raise ShopifyAPIError(f"Request failed with status {response.status_code}: {response.text}")

        try:
            response_data = response.json()
        except json.JSONDecodeError as e:
            raise ShopifyAPIError(f"Failed to decode JSON response: {response.text[:200]}") from e

        if "extensions" in response_data:
            self._update_throttle_status(response_data["extensions"])

        if response_data.get("errors"):
            raise ShopifyGraphQLError(response_data["errors"])

        return response_data.get("data") or {}

    async def list_page(self, shop: str, page_size: int, cursor: Optional[str] = None) -> ProductPage:
        """Fetch one page of products after `cursor` (None for the first page)."""
        variables = {"first": page_size, "after": cursor}
        estimated_cost = 2 + page_size
        data = await self.execute(shop, PRODUCTS_PAGE_QUERY, variables, estimated_cost=estimated_cost)

        products = data.get("products")
        if not isinstance(products, dict):
            raise ShopifyAPIError(f"Unexpected response structure for {shop}: no products connection")

        records: List[RemoteProduct] = [
            RemoteProduct.model_validate(edge.get("node") or {})
            for edge in products.get("edges", [])
        ]
        page_info = products.get("pageInfo") or {}

        return ProductPage(
            records=records,
            has_next_page=bool(page_info.get("hasNextPage", False)),
            end_cursor=page_info.get("endCursor"),
        )
