from relay.core.profiles import SERVERLESS
from relay.serverless import RelayRequestHandler


class handler(RelayRequestHandler):
    profile = SERVERLESS
