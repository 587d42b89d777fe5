from commerce_widget.utils.error_handling import (
    AppError,
    ConfigurationMissing,
    ContextTimeout,
    HttpError,
    NotFound,
    SearchFailed,
    UnknownError,
    to_user_message,
)


def test_configuration_missing_lists_keys():
    error = ConfigurationMissing(["woocommerce_url", "woocommerce_consumer_key"])
    assert error.missing == ("woocommerce_url", "woocommerce_consumer_key")
    assert "woocommerce_url" in str(error)
    assert "WooCommerce Settings page" in to_user_message(error)
    assert error.status_code == 503


def test_not_found_names_the_query():
    error = NotFound("a@b.com")
    assert error.status_code == 404
    assert to_user_message(error) == (
        "No users found for email: a@b.com. "
        "Please check the email address and try again."
    )


def test_http_error_carries_status():
    error = HttpError(401, "Unauthorized")
    assert error.status == 401
    assert error.status_code == 401
    assert "401 - Unauthorized" in to_user_message(error)


def test_timeout_message():
    error = ContextTimeout(5)
    assert error.status_code == 504
    assert to_user_message(error) == "No response received from Chatwoot. Please try again."


def test_search_failed_suggests_checking_settings():
    assert "check your settings" in to_user_message(SearchFailed())


def test_foreign_exceptions_map_to_unknown_error_text():
    assert to_user_message(RuntimeError("boom")) == UnknownError.user_message


def test_all_errors_share_the_base_class():
    for error in (ConfigurationMissing(), NotFound("x"), HttpError(500), SearchFailed()):
        assert isinstance(error, AppError)
