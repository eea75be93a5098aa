from .client import ShopifyGraphQLClient, ShopifyGraphQLError
from .pager import ProductPageWalker
from .importer import ShopifyImporter
