"""
Common Error Constants

Centralized error messages shared by the cart core and the HTTP layer.
"""

# Checkout errors
ERROR_UNAUTHENTICATED = "Please sign in to continue to checkout"
ERROR_CART_EMPTY = "Your cart is empty. Please add items to your cart."

# Storage errors (logged, never surfaced to the shopper)
ERROR_STORAGE_READ = "Failed to read cart from storage"
ERROR_STORAGE_WRITE = "Failed to persist cart"
ERROR_STORAGE_CORRUPT = "Corrupted cart payload discarded"

# Configuration errors
ERROR_REDIS_NOT_CONFIGURED = "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set"
ERROR_UNKNOWN_STORAGE = "Unknown CART_STORAGE backend"


class CheckoutError(Exception):
    """Raised when the cart cannot be handed off to checkout."""

    UNAUTHENTICATED = "unauthenticated"
    EMPTY_CART = "empty_cart"

    def __init__(self, reason: str, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message
