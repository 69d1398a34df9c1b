class CacheKeys:
    """Key and channel generators for all Redis keys."""

    @staticmethod
    def cart(cart_id: str) -> str:
        """Hash of sku -> quantity for one storefront cart."""
        return f"cart:{cart_id}"

    @staticmethod
    def order_notification() -> str:
        """Redis channel consumed by the mailer for order confirmation emails."""
        return "order:notification"
