from relay.core.profiles import APP_BUILDER
from relay.serverless import RelayRequestHandler


class handler(RelayRequestHandler):
    profile = APP_BUILDER
