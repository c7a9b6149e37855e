"""Plain-text summaries and social share links for stored results."""
from __future__ import annotations

from urllib.parse import quote, urlencode

from .abjad_engine import get_element
from .storage import CompatibilityRecord

WHATSAPP_SHARE_URL = "https://wa.me/"
TWITTER_SHARE_URL = "https://twitter.com/intent/tweet"
FACEBOOK_SHARE_URL = "https://www.facebook.com/sharer/sharer.php"
EMAIL_SUBJECT = "Muslim Compatibility Results"


def generate_share_text(record: CompatibilityRecord) -> str:
    element_1 = get_element(record.partner1_digital_root)
    element_2 = get_element(record.partner2_digital_root)

    lines = [
        "🌟 Muslim Compatibility Results 🌟",
        "Based on Islamic Numerology",
        "",
        f"{record.partner1_name} & {record.partner2_name}: {record.overall_compatibility_score}% Compatible",
        "",
        "Name Analysis:",
        f"- {record.partner1_name}: {element_1.name} Element ({element_1.arabic})",
        f"- {record.partner2_name}: {element_2.name} Element ({element_2.arabic})",
        "",
    ]
    if record.life_path_compatibility_score is not None:
        lines += [f"Life Path Compatibility: {record.life_path_compatibility_score}%", ""]
    lines += [
        f"Result: {record.compatibility_level}!",
        record.insights,
        "",
        "Calculated using Islamic Abjad numerology",
        "#MuslimCompatibility #IslamicNumerology",
    ]
    return "\n".join(lines)


def build_share_links(text: str, page_url: str) -> dict[str, str]:
    return {
        "whatsapp": f"{WHATSAPP_SHARE_URL}?{urlencode({'text': text})}",
        "twitter": f"{TWITTER_SHARE_URL}?{urlencode({'text': text})}",
        "facebook": f"{FACEBOOK_SHARE_URL}?{urlencode({'u': page_url})}",
        # mailto bodies need %20, not "+"
        "email": f"mailto:?{urlencode({'subject': EMAIL_SUBJECT, 'body': text}, quote_via=quote)}",
    }
