from .forwarder import forward, preflight, upstream_url, with_cors, yap_open

__all__ = ["forward", "preflight", "upstream_url", "with_cors", "yap_open"]
