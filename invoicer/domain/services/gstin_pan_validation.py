# invoicer/domain/services/gstin_pan_validation.py

import re
from typing import Literal

PAN_REGEX = re.compile(r"^[A-Z]{5}[0-9]{4}[A-Z]$")
GSTIN_REGEX = re.compile(r"^[0-9]{2}[A-Z]{5}[0-9]{4}[A-Z][1-9A-Z]Z[0-9A-Z]$")
PHONE_REGEX = re.compile(r"^[6-9]\d{9}$")
EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# GST state codes (first two digits of a GSTIN)
GST_STATE_CODES: dict[str, str] = {
    "01": "Jammu and Kashmir",
    "02": "Himachal Pradesh",
    "03": "Punjab",
    "04": "Chandigarh",
    "05": "Uttarakhand",
    "06": "Haryana",
    "07": "Delhi",
    "08": "Rajasthan",
    "09": "Uttar Pradesh",
    "10": "Bihar",
    "11": "Sikkim",
    "12": "Arunachal Pradesh",
    "13": "Nagaland",
    "14": "Manipur",
    "15": "Mizoram",
    "16": "Tripura",
    "17": "Meghalaya",
    "18": "Assam",
    "19": "West Bengal",
    "20": "Jharkhand",
    "21": "Odisha",
    "22": "Chhattisgarh",
    "23": "Madhya Pradesh",
    "24": "Gujarat",
    "26": "Dadra and Nagar Haveli and Daman and Diu",
    "27": "Maharashtra",
    "28": "Andhra Pradesh",
    "29": "Karnataka",
    "30": "Goa",
    "31": "Lakshadweep",
    "32": "Kerala",
    "33": "Tamil Nadu",
    "34": "Puducherry",
    "35": "Andaman and Nicobar Islands",
    "36": "Telangana",
    "37": "Andhra Pradesh (New)",
    "38": "Ladakh",
}


def normalize_code(code: str | None) -> str:
    """Strip whitespace and upper-case a GSTIN / PAN before matching or storing."""
    return (code or "").strip().upper()


def validate_pan(pan: str | None) -> bool:
    pan = normalize_code(pan)
    if not pan:
        return False
    return bool(PAN_REGEX.match(pan))


def validate_gst_number(gstin: str | None) -> bool:
    gstin = normalize_code(gstin)
    if not gstin:
        return False
    return bool(GSTIN_REGEX.match(gstin))


def validate_phone(phone: str | None) -> bool:
    """10-digit Indian mobile number starting with 6-9 (no country code)."""
    if not phone:
        return False
    return bool(PHONE_REGEX.match(phone.strip()))


def validate_email(email: str | None) -> bool:
    if not email:
        return False
    return bool(EMAIL_REGEX.match(email.strip()))


def state_from_gstin(gstin: str | None) -> str:
    """State name for the GSTIN's 2-digit state code, or ``""`` if unknown."""
    gstin = normalize_code(gstin)
    return GST_STATE_CODES.get(gstin[:2], "") if len(gstin) >= 2 else ""


def normalize_state(state: str | None) -> str:
    return (state or "").strip().lower()


def get_gst_type(seller_state: str, buyer_state: str) -> Literal["inter", "intra"]:
    """``"intra"`` when both parties are in the same state (case/space-insensitive)."""
    return "intra" if normalize_state(seller_state) == normalize_state(buyer_state) else "inter"


def is_inter_state(seller_state: str, buyer_state: str) -> bool:
    return get_gst_type(seller_state, buyer_state) == "inter"


# ---------------------------------------------------------------------------
# Phone number display
# ---------------------------------------------------------------------------

def format_phone_number(phone: str) -> str:
    """Format as ``+91 98765 43210``; anything unrecognised is returned unchanged."""
    digits = re.sub(r"\D", "", phone or "")
    if len(digits) == 10:
        return f"+91 {digits[:5]} {digits[5:]}"
    if len(digits) == 12 and digits.startswith("91"):
        return f"+{digits[:2]} {digits[2:7]} {digits[7:]}"
    return phone
