"""Rejection reason codes used when filtering withdrawal exports.

The enumeration is the single source for both label lookup and the reason
selector. Declaration order is the order operators see in the selector.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

ALL_REASONS_LABEL = "Tüm Ret Sebepleri"
EMPTY_LABEL = "-"


class RejectReason(str, Enum):
    ANAPARA_CEVRIM = ("anapara_cevrim", "Anapara Eksik Çevrim")
    ACIK_BONUS_CEVRIM = ("acik_bonus_cevrim", "Bonus Açık Bahis Mevcut")
    ACIK_BAHIS_CEVRIM = ("acik_bahis_cevrim", "Açık Bahis Mevcut")
    COKLU_HESAP = ("coklu_hesap", "Çoklu Hesap")
    IP_COKLU = ("ip_coklu", "Aynı IP Çoklu Hesap")
    AYNI_AILE_COKLU = ("ayni_aile_coklu", "Aynı Aile Çoklu Hesap")
    DENEME_SINIR = ("deneme_sinir", "Deneme Bonusu Çekim Sınırı")
    CALL_SINIRI = ("call_siniri", "Dış Data Hediyesi Çekim Sınırı")
    PROMOSYON_SINIR = ("promosyon_sinir", "Promosyon Kodu Çekim Sınırı")
    YATIRIM_SINIR = ("yatirim_sinir", "Yatırıma Bağlı Çekim Sınırı")
    HEDIYE_SINIR = ("hediye_sinir", "Hediye Bonusu Çekim Sınırı")
    BONUS_SINIR = ("bonus_sinir", "Bonus Çekim Sınırı")
    SAFE_BAHIS = ("safe_bahis", "Safe Bahis")
    KURMA_BAHIS = ("kurma_bahis", "Kurma/Riskli Bahis")
    BIRE1_BAHIS = ("bire1_bahis", "1e1 Bahis")
    CASINO_KURMA_BAHIS = ("casino_kurma_bahis", "Casino Kurma Bahis")
    OZEL_OYUN_KONTROL = ("ozel_oyun_kontrol", "Özel Oyun Kontrol")
    YATIRIM_BONUS_SUISTIMAL = ("yatirim_bonus_suistimal", "Yatırım Bonusu Suistimali")
    CASHBACK_SUISTIMAL = ("cashback_suistimal", "Cashback Suistimali")
    DENEME_SUISTIMAL = ("deneme_suistimal", "Deneme Bonusu Suistimali")
    HEDIYE_SUISTIMAL = ("hediye_suistimal", "Hediye Bonus Suistimali")
    YONTEM_SORUNU = ("yontem_sorunu", "Yöntem Sorunu")
    TC_HATA = ("tc_hata", "TC Bilgileri Hatalı")
    SEKIZ_SAATTE_CEKIM = ("sekiz_saatte_cekim", "Çekim Saat Sınırı")
    YENI_GUN = ("yeni_gun", "Yeni Gün")
    IKIYUZTL_ALT = ("ikiyuztl_alt", "200 TL Altı")
    ON_KATLARI = ("on_katlari", "10 Katları")
    UYE_IPTALI = ("uye_iptali", "Üye Talep İptali")
    DIGER = ("diger", "Diğer Sebepler")

    def __new__(cls, code: str, label: str) -> "RejectReason":
        member = str.__new__(cls, code)
        member._value_ = code
        member.label = label
        return member


@dataclass(frozen=True, slots=True)
class UnknownReason:
    """A reason code the registry does not know yet; renders as the raw code."""

    code: str

    @property
    def label(self) -> str:
        return self.code if self.code.strip() else EMPTY_LABEL


def parse_reason(code: str) -> RejectReason | UnknownReason:
    try:
        return RejectReason(code)
    except ValueError:
        return UnknownReason(code)


def label_for(code: str) -> str:
    """Return the display label for ``code``, passing unknown codes through."""

    return parse_reason(code).label


def reason_options() -> list[tuple[str, str]]:
    return [(reason.value, reason.label) for reason in RejectReason]


__all__ = [
    "ALL_REASONS_LABEL",
    "RejectReason",
    "UnknownReason",
    "label_for",
    "parse_reason",
    "reason_options",
]
