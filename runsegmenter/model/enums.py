"""
model/enums.py

(Краткое RU: Перечисления модели сегментации: письменности Unicode, стиль представления,
флаги эмодзи-свойств.)

EN: Domain enums for run segmentation (closed, fully type-safe, based on the Unicode
Scripts.txt property values and the UTS #51 emoji properties).
NO classification logic here! Codepoint lookup lives in runsegmenter/unicode/classifier.

- Script: ISO 15924 codes as values, Unicode long names via ``long_name``.
- Weak scripts (Common, Inherited, Unknown) never force a run boundary.
- RunPresentationStyle: text glyphs vs. color emoji glyphs.
- EmojiProperty: per-codepoint flag set consumed by the emoji recognizer.

See Also:
    - Unicode Standard Annex #24 (Script Property)
    - Unicode Technical Standard #51 (Unicode Emoji)
"""

from __future__ import annotations

import logging
from enum import Enum, Flag, auto
from typing import Final, Literal

_logger: Final[logging.Logger] = logging.getLogger(__name__)


# === SCRIPTS ===


class Script(str, Enum):
    ADLAM = "Adlm"
    CAUCASIAN_ALBANIAN = "Aghb"
    AHOM = "Ahom"
    ARABIC = "Arab"
    IMPERIAL_ARAMAIC = "Armi"
    ARMENIAN = "Armn"
    AVESTAN = "Avst"
    BALINESE = "Bali"
    BAMUM = "Bamu"
    BASSA_VAH = "Bass"
    BATAK = "Batk"
    BENGALI = "Beng"
    BERIA_ERFE = "Berf"
    BHAIKSUKI = "Bhks"
    BOPOMOFO = "Bopo"
    BRAHMI = "Brah"
    BRAILLE = "Brai"
    BUGINESE = "Bugi"
    BUHID = "Buhd"
    CHAKMA = "Cakm"
    CANADIAN_ABORIGINAL = "Cans"
    CARIAN = "Cari"
    CHAM = "Cham"
    CHEROKEE = "Cher"
    CHORASMIAN = "Chrs"
    COPTIC = "Copt"
    CYPRO_MINOAN = "Cpmn"
    CYPRIOT = "Cprt"
    CYRILLIC = "Cyrl"
    DEVANAGARI = "Deva"
    DIVES_AKURU = "Diak"
    DOGRA = "Dogr"
    DESERET = "Dsrt"
    DUPLOYAN = "Dupl"
    EGYPTIAN_HIEROGLYPHS = "Egyp"
    ELBASAN = "Elba"
    ELYMAIC = "Elym"
    ETHIOPIC = "Ethi"
    GARAY = "Gara"
    GEORGIAN = "Geor"
    GLAGOLITIC = "Glag"
    GUNJALA_GONDI = "Gong"
    MASARAM_GONDI = "Gonm"
    GOTHIC = "Goth"
    GRANTHA = "Gran"
    GREEK = "Grek"
    GUJARATI = "Gujr"
    GURUNG_KHEMA = "Gukh"
    GURMUKHI = "Guru"
    HANGUL = "Hang"
    HAN = "Hani"
    HANUNOO = "Hano"
    HATRAN = "Hatr"
    HEBREW = "Hebr"
    HIRAGANA = "Hira"
    ANATOLIAN_HIEROGLYPHS = "Hluw"
    PAHAWH_HMONG = "Hmng"
    NYIAKENG_PUACHUE_HMONG = "Hmnp"
    KATAKANA_OR_HIRAGANA = "Hrkt"
    OLD_HUNGARIAN = "Hung"
    OLD_ITALIC = "Ital"
    JAVANESE = "Java"
    JURCHEN = "Jurc"
    KAYAH_LI = "Kali"
    KATAKANA = "Kana"
    KAWI = "Kawi"
    KHAROSHTHI = "Khar"
    KHMER = "Khmr"
    KHOJKI = "Khoj"
    KHITAN_SMALL_SCRIPT = "Kits"
    KANNADA = "Knda"
    KIRAT_RAI = "Krai"
    KAITHI = "Kthi"
    TAI_THAM = "Lana"
    LAO = "Laoo"
    LATIN = "Latn"
    LEPCHA = "Lepc"
    LIMBU = "Limb"
    LINEAR_A = "Lina"
    LINEAR_B = "Linb"
    LISU = "Lisu"
    LYCIAN = "Lyci"
    LYDIAN = "Lydi"
    MAHAJANI = "Mahj"
    MAKASAR = "Maka"
    MANDAIC = "Mand"
    MANICHAEAN = "Mani"
    MARCHEN = "Marc"
    MEDEFAIDRIN = "Medf"
    MENDE_KIKAKUI = "Mend"
    MEROITIC_CURSIVE = "Merc"
    MEROITIC_HIEROGLYPHS = "Mero"
    MALAYALAM = "Mlym"
    MODI = "Modi"
    MONGOLIAN = "Mong"
    MRO = "Mroo"
    MEETEI_MAYEK = "Mtei"
    MULTANI = "Mult"
    MYANMAR = "Mymr"
    NAG_MUNDARI = "Nagm"
    NANDINAGARI = "Nand"
    OLD_NORTH_ARABIAN = "Narb"
    NABATAEAN = "Nbat"
    NEWA = "Newa"
    NKO = "Nkoo"
    NUSHU = "Nshu"
    OGHAM = "Ogam"
    OL_CHIKI = "Olck"
    OL_ONAL = "Onao"
    OLD_TURKIC = "Orkh"
    ORIYA = "Orya"
    OSAGE = "Osge"
    OSMANYA = "Osma"
    OLD_UYGHUR = "Ougr"
    PALMYRENE = "Palm"
    PAU_CIN_HAU = "Pauc"
    PROTO_CUNEIFORM = "Pcun"
    OLD_PERMIC = "Perm"
    PHAGS_PA = "Phag"
    INSCRIPTIONAL_PAHLAVI = "Phli"
    PSALTER_PAHLAVI = "Phlp"
    PHOENICIAN = "Phnx"
    MIAO = "Plrd"
    INSCRIPTIONAL_PARTHIAN = "Prti"
    REJANG = "Rjng"
    HANIFI_ROHINGYA = "Rohg"
    RUNIC = "Runr"
    SAMARITAN = "Samr"
    OLD_SOUTH_ARABIAN = "Sarb"
    SAURASHTRA = "Saur"
    SEAL = "Seal"
    SIGNWRITING = "Sgnw"
    SHAVIAN = "Shaw"
    SHARADA = "Shrd"
    SIDDHAM = "Sidd"
    SIDETIC = "Sidt"
    KHUDAWADI = "Sind"
    SINHALA = "Sinh"
    SOGDIAN = "Sogd"
    OLD_SOGDIAN = "Sogo"
    SORA_SOMPENG = "Sora"
    SOYOMBO = "Soyo"
    SUNDANESE = "Sund"
    SUNUWAR = "Sunu"
    SYLOTI_NAGRI = "Sylo"
    SYRIAC = "Syrc"
    TAGBANWA = "Tagb"
    TAKRI = "Takr"
    TAI_LE = "Tale"
    NEW_TAI_LUE = "Talu"
    TAMIL = "Taml"
    TANGUT = "Tang"
    TAI_VIET = "Tavt"
    TAI_YO = "Tayo"
    TELUGU = "Telu"
    TIFINAGH = "Tfng"
    TAGALOG = "Tglg"
    THAANA = "Thaa"
    THAI = "Thai"
    TIBETAN = "Tibt"
    TIRHUTA = "Tirh"
    TANGSA = "Tnsa"
    TODHRI = "Todr"
    TOLONG_SIKI = "Tols"
    TOTO = "Toto"
    TULU_TIGALARI = "Tutg"
    UGARITIC = "Ugar"
    VAI = "Vaii"
    VITHKUQI = "Vith"
    WARANG_CITI = "Wara"
    WANCHO = "Wcho"
    OLD_PERSIAN = "Xpeo"
    CUNEIFORM = "Xsux"
    YEZIDI = "Yezi"
    YI = "Yiii"
    ZANABAZAR_SQUARE = "Zanb"

    # Sentinels for contextual ("weak") codepoints
    INHERITED = "Zinh"
    COMMON = "Zyyy"
    UNKNOWN = "Zzzz"

    @property
    def code(self) -> str:
        """ISO 15924 four-letter code."""
        return self.value

    @property
    def long_name(self) -> str:
        """Unicode long property value alias, e.g. ``Old_Italic``."""
        if self is Script.SIGNWRITING:
            return "SignWriting"
        return "_".join(part.capitalize() for part in self.name.split("_"))

    @property
    def is_weak(self) -> bool:
        return self in _WEAK_SCRIPTS

    @property
    def is_determinate(self) -> bool:
        return not self.is_weak

    @classmethod
    def from_code(cls, code: str) -> "Script":
        """
        Map an ISO 15924 code to a Script; codes outside the enumeration become UNKNOWN.

        Newer Unicode data may report scripts this enumeration does not know yet,
        those codepoints are then treated like unassigned ones.
        """
        script = _SCRIPTS_BY_CODE.get(code.capitalize() if len(code) == 4 else code)
        if script is None:
            _logger.debug("Unrecognised script code %r mapped to Unknown", code)
            return cls.UNKNOWN
        return script

    @classmethod
    def from_name(cls, name: str) -> "Script":
        """
        Resolve either an ISO code (``Latn``) or a long name (``Latin``, ``old italic``).

        Raises:
            ValueError: If the name matches no script.
        """
        key = name.strip()
        if len(key) == 4 and key.capitalize() in _SCRIPTS_BY_CODE:
            return _SCRIPTS_BY_CODE[key.capitalize()]
        member = key.upper().replace(" ", "_").replace("-", "_")
        try:
            return cls[member]
        except KeyError:
            raise ValueError(f"Unknown script name: {name!r}") from None

    def localized_name(self, lang: Literal["ru", "en"] = "en") -> str:
        names_ru = {
            Script.COMMON: "Общая",
            Script.INHERITED: "Унаследованная",
            Script.UNKNOWN: "Неизвестная",
        }
        if lang == "ru" and self in names_ru:
            return names_ru[self]
        return self.long_name.replace("_", " ")


_WEAK_SCRIPTS: Final[frozenset[Script]] = frozenset(
    {Script.COMMON, Script.INHERITED, Script.UNKNOWN}
)
_SCRIPTS_BY_CODE: Final[dict[str, Script]] = {script.value: script for script in Script}


# === PRESENTATION ===


class RunPresentationStyle(str, Enum):
    TEXT = "text"
    EMOJI = "emoji"

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            RunPresentationStyle.TEXT: "Текст",
            RunPresentationStyle.EMOJI: "Эмодзи",
        }
        names_en = {
            RunPresentationStyle.TEXT: "Text",
            RunPresentationStyle.EMOJI: "Emoji",
        }
        return names_ru[self] if lang == "ru" else names_en[self]


class EmojiProperty(Flag):
    """Per-codepoint emoji classification flags (UTS #51 and fixed sequence codepoints)."""

    NONE = 0
    EMOJI = auto()
    EMOJI_PRESENTATION = auto()  # Emoji_Presentation=Yes, emoji by default
    TEXT_PRESENTATION = auto()  # Emoji=Yes but text by default
    MODIFIER_BASE = auto()
    MODIFIER = auto()  # U+1F3FB..U+1F3FF skin tones
    REGIONAL_INDICATOR = auto()
    TAG_CHARACTER = auto()  # U+E0020..U+E007E
    TAG_CANCEL = auto()  # U+E007F
    VARIATION_SELECTOR_TEXT = auto()  # U+FE0E
    VARIATION_SELECTOR_EMOJI = auto()  # U+FE0F
    ZERO_WIDTH_JOINER = auto()  # U+200D
    KEYCAP_BASE = auto()  # # * 0-9
    ENCLOSING_KEYCAP = auto()  # U+20E3, U+20E0


# === DEFAULTS ===

DEFAULT_SCRIPT: Final[Script] = Script.UNKNOWN
DEFAULT_FALLBACK_SCRIPT: Final[Script] = Script.COMMON
DEFAULT_PRESENTATION_STYLE: Final[RunPresentationStyle] = RunPresentationStyle.TEXT


__all__ = [
    "Script",
    "RunPresentationStyle",
    "EmojiProperty",
    "DEFAULT_SCRIPT",
    "DEFAULT_FALLBACK_SCRIPT",
    "DEFAULT_PRESENTATION_STYLE",
]
