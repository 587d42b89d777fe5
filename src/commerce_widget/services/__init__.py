"""Host bridge, credential providers and the WooCommerce resolution pipeline."""
