from tracking import t

from botapp.i18n import Language, Translator, create_translator
from botapp.i18n.strings import STRINGS


def test_default_translator_is_traditional_chinese():
    t('tests.unit.test_translator.test_default_translator_is_traditional_chinese')
    tr = create_translator()
    assert tr.get_language() == Language.TRADITIONAL_CHINESE.value
    assert tr.t("notif.wrong_password") == "密碼錯誤！"


def test_parameters_are_substituted():
    t('tests.unit.test_translator.test_parameters_are_substituted')
    assert Translator("en").t("form.error.conflict", user_name="Bob") == "Time conflict! Already booked by Bob"
    assert Translator("en").t("menu.list", count=3) == "📋 All bookings (3)"


def test_missing_keys_fall_back_to_default_then_marker():
    t('tests.unit.test_translator.test_missing_keys_fall_back_to_default_then_marker')
    assert Translator("fr").t("alert.ack") == "知道了"
    assert Translator("en").t("no.such.key") == "[no.such.key]"


def test_every_language_defines_the_same_keys():
    t('tests.unit.test_translator.test_every_language_defines_the_same_keys')
    assert set(STRINGS["en"]) == set(STRINGS["zh-TW"])
