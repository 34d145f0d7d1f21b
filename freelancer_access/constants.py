# Content-type key namespaces used by the grant store
TAXONOMY_KEY_PREFIX = "tax_"
MEDIA_KEY = "media"

# Content type of uploaded files in the content table
ATTACHMENT_TYPE = "attachment"

# Built-in content types that are always offered for restriction
BUILTIN_CONTENT_TYPES = ("page", "post")

# Matches no real content; used when the allowed set is empty
EMPTY_FILTER_ID = 0

# Integration flags and the content types each one enables
INTEGRATION_CONTENT_TYPES = {
    "woocommerce_products": ("product",),
    "woocommerce_orders": ("shop_order",),
    "woocommerce_coupons": ("shop_coupon",),
    "elementor_templates": ("elementor_library",),
    "elementor_theme_builder": ("elementor-hf", "elementor-thhf"),
}

TEMPLATE_ID_PREFIX = "tpl_"


def taxonomy_key(taxonomy: str) -> str:
    return f"{TAXONOMY_KEY_PREFIX}{taxonomy}"
