from flask_cors import CORS

from teddystore.loaders.deferred import DeferredRunner
from teddystore.storefront.client import StorefrontClient

# Singletons (initialized in app factory)
cors = CORS()
storefront = StorefrontClient()
deferred_runner = DeferredRunner()
