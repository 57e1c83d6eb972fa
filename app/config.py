"""
Configuration management for the Seal Flow proxy.
"""
import os
from dotenv import load_dotenv

from .models.region import Region, REGION_CODES

load_dotenv()

PROXY_MODES = ('full', 'search-only')


def load_regions_from_env() -> list:
    """
    Read the per-region credential set from the environment.

    For each region code XX:
        SHOP_DOMAIN_XX, SEAL_SUBS_TOKEN_XX, SEAL_SUBS_SECRET_XX (optional),
        SHOPIFY_ACCESS_TOKEN_XX

    Regions without a shop domain are left out.
    """
    regions = []
    for code in REGION_CODES:
        shop = os.getenv(f'SHOP_DOMAIN_{code}')
        if not shop:
            continue
        regions.append(Region(
            code=code,
            shop=shop.strip(),
            seal_token=os.getenv(f'SEAL_SUBS_TOKEN_{code}') or None,
            flow_secret=os.getenv(f'SEAL_SUBS_SECRET_{code}') or None,
            shopify_token=os.getenv(f'SHOPIFY_ACCESS_TOKEN_{code}') or None,
        ))
    return regions


class BaseConfig:
    """Base configuration."""
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    REGIONS = load_regions_from_env()

    # Shopify Admin GraphQL
    SHOPIFY_ADMIN_API_VERSION = os.getenv('SHOPIFY_ADMIN_API_VERSION', '2025-07')

    # Seal Subscriptions merchant API
    SEAL_API_BASE_URL = os.getenv(
        'SEAL_API_BASE_URL',
        'https://app.sealsubscriptions.com/shopify/merchant/api'
    )
    SEAL_MAX_WORKERS = int(os.getenv('SEAL_MAX_WORKERS', '8'))

    # Seconds before any outbound call is abandoned
    HTTP_TIMEOUT = float(os.getenv('HTTP_TIMEOUT', '10'))

    # 'full' = resolve + lookup + tag, 'search-only' = just search Seal
    PROXY_MODE = os.getenv('PROXY_MODE', 'full')

    # Include exception details in 500 bodies
    DEBUG_ERRORS = os.getenv('DEBUG_ERRORS') == 'true'

    # Flow payloads are tiny; anything bigger is rejected with 413
    MAX_CONTENT_LENGTH = 200 * 1024


class DevelopmentConfig(BaseConfig):
    """Development configuration."""
    DEBUG = True


class ProductionConfig(BaseConfig):
    """Production configuration."""
    DEBUG = False


class TestingConfig(BaseConfig):
    """Testing configuration."""
    TESTING = True
    DEBUG_ERRORS = False
    PROXY_MODE = 'full'
    SEAL_API_BASE_URL = 'https://seal.test/api'
    SHOPIFY_ADMIN_API_VERSION = '2025-07'
    HTTP_TIMEOUT = 5.0
    SEAL_MAX_WORKERS = 4
    REGIONS = [
        Region(code='UK', shop='shop-uk.myshopify.com', seal_token='seal-uk',
               flow_secret='S', shopify_token='shpat_uk'),
        Region(code='EU', shop='shop-eu.myshopify.com', seal_token='seal-eu',
               flow_secret=None, shopify_token='shpat_eu'),
        Region(code='US', shop='shop-us.myshopify.com', seal_token=None,
               flow_secret=None, shopify_token='shpat_us'),
    ]


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig
}


def get_config(config_name: str = 'development'):
    """Get configuration class by name."""
    return config_map.get(config_name, DevelopmentConfig)


def validate_config(config) -> None:
    """
    Validate configuration before app startup.

    Args:
        config: The Flask config mapping

    Raises:
        RuntimeError: If validation fails
    """
    mode = config.get('PROXY_MODE')
    if mode not in PROXY_MODES:
        raise RuntimeError(
            f"PROXY_MODE must be one of {', '.join(PROXY_MODES)} (got '{mode}')"
        )

    if config.get('HTTP_TIMEOUT', 0) <= 0:
        raise RuntimeError("HTTP_TIMEOUT must be a positive number of seconds")
