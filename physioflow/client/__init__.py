"""HTTP client, query cache and request choreography."""

from physioflow.client.cache import QueryCache
from physioflow.client.debounce import AutoSaver, Debouncer
from physioflow.client.errors import ApiError, is_api_error
from physioflow.client.http import ApiClient, ApiResponse
from physioflow.client.mutation import MutationState, OptimisticMutation

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiResponse",
    "AutoSaver",
    "Debouncer",
    "MutationState",
    "OptimisticMutation",
    "QueryCache",
    "is_api_error",
]
