"""Tests for i18n translations"""
import pytest

from shopcart.errors import (
    MSG_ADD_FAILED,
    MSG_OUT_OF_STOCK,
    MSG_PRODUCT_NOT_IN_CART,
    MSG_REMOVE_FAILED,
    MSG_UPDATE_FAILED,
)
from shopcart.i18n import SUPPORTED_LANGUAGES, detect_language, get_text, reload_translations

MESSAGE_KEYS = [MSG_OUT_OF_STOCK, MSG_ADD_FAILED, MSG_REMOVE_FAILED, MSG_PRODUCT_NOT_IN_CART, MSG_UPDATE_FAILED]


def test_portuguese_messages():
    """Default storefront wording"""
    assert get_text(MSG_OUT_OF_STOCK, "pt") == "Quantidade solicitada fora de estoque"
    assert get_text(MSG_ADD_FAILED, "pt") == "Erro na adição do produto"
    assert get_text(MSG_REMOVE_FAILED, "pt") == "Erro na remoção do produto"
    assert get_text(MSG_PRODUCT_NOT_IN_CART, "pt") == "Erro na alteração de quantidade do produto"
    assert get_text(MSG_UPDATE_FAILED, "pt") == "Erro na alteração da quantidade do produto"


@pytest.mark.parametrize("lang", list(SUPPORTED_LANGUAGES))
@pytest.mark.parametrize("key", MESSAGE_KEYS)
def test_every_message_translated(lang, key):
    text = get_text(key, lang)
    assert text != key
    assert len(text) > 0


def test_region_code_normalized():
    assert get_text(MSG_OUT_OF_STOCK, "pt-BR") == get_text(MSG_OUT_OF_STOCK, "pt")
    assert detect_language("pt_BR") == "pt"


def test_unsupported_language_falls_back_to_english():
    assert get_text(MSG_OUT_OF_STOCK, "de") == get_text(MSG_OUT_OF_STOCK, "en")
    assert detect_language(None) == "en"


def test_missing_key_returns_key_or_default():
    assert get_text("cart.nope", "pt") == "cart.nope"
    assert get_text("cart.nope", "pt", default="fallback") == "fallback"


def test_section_key_is_not_text():
    assert get_text("cart", "en") == "cart"


def test_get_text_with_params():
    assert get_text("cart.total", "pt", total="R$ 10,00") == "Total: R$ 10,00"
    assert "3" in get_text("cart.items", "ru", count=3)


def test_reload_translations():
    first = get_text(MSG_ADD_FAILED, "en")
    reload_translations()
    assert get_text(MSG_ADD_FAILED, "en") == first
