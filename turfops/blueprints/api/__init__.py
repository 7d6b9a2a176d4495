from turfops.blueprints.api.recommendations import recommendations_api

__all__ = ["recommendations_api"]
