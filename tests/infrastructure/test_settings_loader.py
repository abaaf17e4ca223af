# tests/infrastructure/test_settings_loader.py
import pytest

from domain.cart import ShippingOption
from domain.exceptions import ValidationError
from infrastructure.config.settings_loader import DEFAULT_CONFIG_FILE, CheckoutSettingsLoader


YAML_CONFIG = """
order:
  anonymous_checkout_allowed: false
  min_order_placement_interval_sec: 10
shopping_cart:
  quick_checkout_enabled: true
shipping:
  skip_if_single_option: false
  options:
    - system_name: Shipping.Standard
      name: Standard delivery
    - Shipping.Pickup
payment:
  methods: [Payments.Invoice, Payments.PayPal]
  redirect_urls:
    Payments.PayPal: https://pay.test/{order_guid}
catalog:
  stock:
    SKU-1: 3
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "checkout.yaml"
    path.write_text(YAML_CONFIG, encoding="utf-8")
    return path


def test_load_yaml_file(config_file):
    config = CheckoutSettingsLoader(environ={}).load(config_file)

    assert config.order.anonymous_checkout_allowed is False
    assert config.order.min_order_placement_interval_sec == 10
    assert config.shopping_cart.quick_checkout_enabled is True
    assert config.shipping.skip_if_single_option is False
    assert config.shipping.options == [
        ShippingOption("Shipping.Standard", "Standard delivery"),
        ShippingOption("Shipping.Pickup", "Shipping.Pickup"),
    ]
    assert config.payment.methods == ["Payments.Invoice", "Payments.PayPal"]
    assert config.payment.redirect_urls["Payments.PayPal"] == "https://pay.test/{order_guid}"
    assert config.catalog.stock == {"SKU-1": 3}


def test_config_file_from_environment(config_file):
    config = CheckoutSettingsLoader(environ={"CHECKOUT_CONFIG_FILE": str(config_file)}).load()

    assert config.order.min_order_placement_interval_sec == 10


def test_missing_file_uses_defaults(tmp_path):
    config = CheckoutSettingsLoader(environ={}).load(tmp_path / "missing.yaml")

    assert config.order.anonymous_checkout_allowed is True
    assert config.order.min_order_placement_interval_sec == 30
    assert config.shopping_cart.quick_checkout_enabled is False
    assert config.payment.methods == []


def test_environment_overrides_file(config_file):
    environ = {
        "CHECKOUT_ANONYMOUS_ALLOWED": "yes",
        "CHECKOUT_QUICK_ENABLED": "0",
        "CHECKOUT_MIN_ORDER_INTERVAL_SEC": "0",
    }

    config = CheckoutSettingsLoader(environ=environ).load(config_file)

    assert config.order.anonymous_checkout_allowed is True
    assert config.shopping_cart.quick_checkout_enabled is False
    assert config.order.min_order_placement_interval_sec == 0


@pytest.mark.parametrize(
    "environ",
    [
        {"CHECKOUT_ANONYMOUS_ALLOWED": "maybe"},
        {"CHECKOUT_MIN_ORDER_INTERVAL_SEC": "soon"},
        {"CHECKOUT_MIN_ORDER_INTERVAL_SEC": "-5"},
    ],
)
def test_invalid_environment_values_are_rejected(config_file, environ):
    with pytest.raises(ValidationError):
        CheckoutSettingsLoader(environ=environ).load(config_file)


def test_invalid_shipping_option_is_rejected():
    with pytest.raises(ValidationError, match="Invalid shipping option"):
        CheckoutSettingsLoader(environ={}).load_from_dict({"shipping": {"options": [{"name": "x"}]}})


def test_empty_option_lists_load_as_empty(tmp_path):
    path = tmp_path / "checkout.yaml"
    path.write_text("shipping:\n  options:\npayment:\n  methods:\n", encoding="utf-8")

    config = CheckoutSettingsLoader(environ={}).load(path)

    assert config.shipping.options == []
    assert config.payment.methods == []


@pytest.mark.parametrize(
    "data,name",
    [
        ({"shipping": {"options": "Shipping.Standard"}}, "shipping.options"),
        ({"payment": {"methods": {"Payments.Invoice": True}}}, "payment.methods"),
    ],
)
def test_non_list_option_values_are_rejected(data, name):
    with pytest.raises(ValidationError, match=f"{name} must be a list"):
        CheckoutSettingsLoader(environ={}).load_from_dict(data)


def test_non_mapping_file_is_rejected(tmp_path):
    path = tmp_path / "checkout.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ValidationError, match="Checkout config is invalid"):
        CheckoutSettingsLoader(environ={}).load(path)


def test_bundled_config_loads():
    config = CheckoutSettingsLoader(environ={}).load(DEFAULT_CONFIG_FILE)

    assert config.catalog.stock["SKU-100"] == 25
    assert len(config.shipping.options) == 2
