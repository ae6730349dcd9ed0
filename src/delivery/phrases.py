"""
Phrase tables for prompts, field labels and explanation steps.

A PhraseTable maps stable keys to str.format templates for one locale,
falling back to English for keys the locale does not define. Generators
receive a table instead of reading a global dictionary, so the arithmetic
never depends on the display language.

Key families:
    binary.prompt.<conversion>   conversion prompts
    basic.* / vlsm.* / wildcard.* / network.* / ipv6.*   subnetting prompts
    label.*                      answer field labels
    step.<operation>             explanation step templates
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import lru_cache

from loguru import logger

from config import get_settings
from src.generation.errors import InvalidParameterError

FALLBACK_LOCALE = "en"

ENGLISH: dict[str, str] = {
    # Binary prompts
    "binary.prompt.bin2dec": "Convert the binary number {value} to decimal.",
    "binary.prompt.bin2hex": "Convert the binary number {value} to hexadecimal.",
    "binary.prompt.hex2bin": "Convert the hexadecimal number {value} to binary.",
    "binary.prompt.hex2dec": "Convert the hexadecimal number {value} to decimal.",
    "binary.prompt.dec2bin": "Convert the decimal number {value} to binary.",
    "binary.prompt.dec2hex": "Convert the decimal number {value} to hexadecimal.",
    # Basic subnetting
    "basic.given_prefix": "Given the IP address {ip} with CIDR prefix /{prefix}:",
    "basic.given_mask": "Given the IP address {ip} with subnet mask {mask}:",
    "basic.ask_network": "What is the network address?",
    "basic.ask_broadcast": "What is the broadcast address?",
    "basic.ask_hosts": "How many usable host addresses are available in this subnet?",
    "basic.ask_first_last": "What are the first and last usable host addresses in this subnet?",
    "basic.ask_prefix": "What is the CIDR prefix notation for this subnet?",
    "basic.ask_mask_cidr": "What is the equivalent CIDR prefix notation?",
    "basic.ask_mask_decimal": "What is the subnet mask in dotted decimal format?",
    "basic.ask_all": "Determine the following for this subnet:",
    # VLSM
    "vlsm.department": "Department {letter}",
    "vlsm.intro": "You are designing a network with the following requirements:",
    "vlsm.allocated": "- Network address allocated: {network}/{prefix}",
    "vlsm.needs": "- {department} needs {hosts} hosts",
    "vlsm.ask": "What subnet address and mask would you assign to {department}?",
    # Wildcard
    "wildcard.convert": "Convert the subnet mask {mask} to a wildcard mask.",
    "wildcard.acl_intro": "You need to create an ACL that matches packets from the network {network}/{prefix}.",
    "wildcard.acl_ask": "What IP address and wildcard mask combination should you use in the ACL statement?",
    # Network calculation
    "network.divide": "Divide {network}/{prefix} into at least {count} subnets.",
    "network.hosts_per_subnet": "Divide {network}/{prefix} so that each subnet has {hosts} hosts.",
    "network.answer_following": "Answer the following questions:",
    "network.ask_required_prefix": "How many host bits do the subnets need, and what is their CIDR prefix?",
    "network.ask_required_mask": (
        "How many subnet bits must you borrow, and what is the subnet mask in dotted decimal notation?"
    ),
    "network.summary_intro": "A router knows {count} contiguous /24 networks, from {first}/24 through {last}/24.",
    "network.ask_summary": "What summary route covers exactly these networks?",
    "network.ask_host_count": "How many usable host addresses are available in a /{prefix} subnet?",
    "network.ask_fixed_hosts": (
        "How many host bits do you need for {hosts} hosts, what are the CIDR prefix and the subnet mask "
        "in dotted decimal notation, and what are subnet 1, subnet 2 and subnet {number}?"
    ),
    # IPv6
    "ipv6.expand": "Expand the abbreviated IPv6 address {address} to its full uncompressed form.",
    "ipv6.abbreviate": "Abbreviate the full IPv6 address {address} to its shortest valid form.",
    # Labels
    "label.network_address": "Network Address",
    "label.broadcast_address": "Broadcast Address",
    "label.usable_hosts": "Usable Hosts",
    "label.first_host": "First Usable Host",
    "label.last_host": "Last Usable Host",
    "label.cidr_prefix": "CIDR Prefix",
    "label.subnet_mask": "Subnet Mask",
    "label.subnet_mask_decimal": "Subnet Mask (dotted decimal)",
    "label.subnet_network_address": "Subnet Network Address",
    "label.wildcard_mask": "Wildcard Mask",
    "label.ip_address": "IP Address",
    "label.host_bits": "Host Bits",
    "label.subnet_bits": "Subnet Bits",
    "label.host_count": "Number of Usable Hosts",
    "label.subnet_n": "Subnet {number}",
    "label.summary_address": "Summary Network Address",
    "label.summary_prefix": "Summary Prefix",
    "label.expanded_ipv6": "Expanded IPv6 Address",
    "label.abbreviated_ipv6": "Abbreviated IPv6 Address",
    # Explanation steps
    "step.positional_term": "{digit} × {base}^{power} = {digit} × {weight} = {result}",
    "step.sum": "Add the terms: {terms} = {result}",
    "step.pad_nibbles": "Pad {value} with leading zeros to {width} bits: {result}",
    "step.nibble_group": "{bits} = {hex}",
    "step.concatenate": "Combine the groups {parts}: {result}",
    "step.divide": "{dividend} ÷ {divisor} = {quotient} remainder {remainder}",
    "step.read_remainders": "Read the remainders from bottom to top: {result}",
    "step.mask_from_prefix": "/{prefix} as a subnet mask: {result}",
    "step.prefix_from_mask": "Count the 1-bits in {mask}: {result}",
    "step.bitwise_and": "Network address: {ip} AND {mask} = {result}",
    "step.bitwise_or": "Broadcast address: {network} OR {wildcard} = {result}",
    "step.first_host": "First usable host: {network} + 1 = {result}",
    "step.last_host": "Last usable host: {broadcast} - 1 = {result}",
    "step.host_count": "Host bits: 32 - {prefix} = {host_bits}; 2^{host_bits} - 2 = {total} - 2 = {result} usable hosts",
    "step.sort_departments": "Order departments by host count: {order}",
    "step.vlsm_allocate": (
        "{department} needs {hosts} hosts, requiring {host_bits} host bits "
        "(2^{host_bits} - 2 = {usable}), so a /{prefix} subnet: {result}"
    ),
    "step.wildcard_octet": "255 - {octet} = {result}",
    "step.acl_pair": "The ACL uses the network address with the wildcard mask: {result}",
    "step.host_bits": "{hosts} hosts need {host_bits} host bits (2^{host_bits} - 2 = {usable})",
    "step.prefix_from_host_bits": "Prefix: 32 - {host_bits} = {result}",
    "step.subnet_bits": "{count} subnets need {subnet_bits} subnet bits (2^{subnet_bits} = {subnets})",
    "step.add_prefix_bits": "New prefix: /{base_prefix} + {bits} = {result}",
    "step.host_bits_from_prefix": "Host bits: 32 - {prefix} = {result}",
    "step.subnet_n": "Subnet {number}: base + ({number} - 1) × {block} addresses = {result}",
    "step.summary_bits": "{count} networks = 2^{bits}, so the summary prefix is 24 - {bits} = {result}",
    "step.ipv6_fill_zero_run": "Replace '::' in {address} with {missing} zero groups",
    "step.ipv6_pad_groups": "Pad every group to 4 hex digits: {result}",
    "step.ipv6_strip_leading_zeros": "Remove leading zeros in each group: {result}",
    "step.ipv6_compress_zero_run": "Replace {length} consecutive zero groups at position {position} with '::': {result}",
}

DUTCH: dict[str, str] = {
    "binary.prompt.bin2dec": "Zet het binaire getal {value} om naar decimaal.",
    "binary.prompt.bin2hex": "Zet het binaire getal {value} om naar hexadecimaal.",
    "binary.prompt.hex2bin": "Zet het hexadecimale getal {value} om naar binair.",
    "binary.prompt.hex2dec": "Zet het hexadecimale getal {value} om naar decimaal.",
    "binary.prompt.dec2bin": "Zet het decimale getal {value} om naar binair.",
    "binary.prompt.dec2hex": "Zet het decimale getal {value} om naar hexadecimaal.",
    "basic.given_prefix": "Gegeven het IP-adres {ip} met CIDR prefix /{prefix}:",
    "basic.given_mask": "Gegeven het IP-adres {ip} met subnet masker {mask}:",
    "basic.ask_network": "Wat is het netwerkadres?",
    "basic.ask_broadcast": "Wat is het broadcastadres?",
    "basic.ask_hosts": "Hoeveel bruikbare host-adressen zijn beschikbaar in dit subnet?",
    "basic.ask_first_last": "Wat zijn de eerste en laatste bruikbare host-adressen in dit subnet?",
    "basic.ask_prefix": "Wat is de CIDR prefix notatie voor dit subnet?",
    "basic.ask_mask_cidr": "Wat is de equivalente CIDR prefix notatie?",
    "basic.ask_mask_decimal": "Wat is het subnet masker in decimale notatie?",
    "basic.ask_all": "Bepaal het volgende voor dit subnet:",
    "vlsm.department": "Afdeling {letter}",
    "vlsm.intro": "Je ontwerpt een netwerk met de volgende vereisten:",
    "vlsm.allocated": "- Toegewezen netwerkadres: {network}/{prefix}",
    "vlsm.needs": "- {department} heeft {hosts} hosts nodig",
    "vlsm.ask": "Welk subnetadres en masker zou je toewijzen aan {department}?",
    "wildcard.convert": "Converteer het subnet masker {mask} naar een wildcard masker.",
    "wildcard.acl_intro": "Je moet een ACL maken die pakketten matcht van het netwerk {network}/{prefix}.",
    "wildcard.acl_ask": "Welke combinatie van IP-adres en wildcard-masker gebruik je in de ACL-regel?",
    "network.divide": "Verdeel {network}/{prefix} in minstens {count} subnetten.",
    "network.hosts_per_subnet": "Verdeel {network}/{prefix} zodat elk subnet {hosts} hosts heeft.",
    "network.answer_following": "Beantwoord de volgende vragen:",
    "network.ask_required_prefix": "Hoeveel host-bits hebben de subnetten nodig, en wat is hun CIDR prefix?",
    "network.ask_required_mask": "Hoeveel subnet-bits moet je lenen, en wat is het subnetmasker in decimale notatie?",
    "network.summary_intro": "Een router kent {count} aaneengesloten /24-netwerken, van {first}/24 tot en met {last}/24.",
    "network.ask_summary": "Welke samenvattende route dekt precies deze netwerken?",
    "network.ask_host_count": "Hoeveel bruikbare host-adressen zijn beschikbaar in een /{prefix} subnet?",
    "network.ask_fixed_hosts": (
        "Hoeveel host-bits heb je nodig voor {hosts} hosts, wat zijn de CIDR prefix en het subnetmasker "
        "in decimale notatie, en wat zijn subnet 1, subnet 2 en subnet {number}?"
    ),
    "ipv6.expand": "Vouw het afgekorte IPv6-adres {address} uit naar zijn volledige vorm.",
    "ipv6.abbreviate": "Verkort het volledige IPv6-adres {address} naar zijn kortste geldige vorm.",
    "label.network_address": "Netwerkadres",
    "label.broadcast_address": "Broadcastadres",
    "label.usable_hosts": "Bruikbare Hosts",
    "label.first_host": "Eerste Bruikbare Host",
    "label.last_host": "Laatste Bruikbare Host",
    "label.subnet_mask": "Subnet Masker",
    "label.subnet_mask_decimal": "Subnetmasker (decimaal)",
    "label.subnet_network_address": "Subnet Netwerkadres",
    "label.wildcard_mask": "Wildcard Masker",
    "label.ip_address": "IP-adres",
    "label.host_bits": "Host-bits",
    "label.subnet_bits": "Subnet-bits",
    "label.host_count": "Aantal Bruikbare Hosts",
    "label.summary_address": "Samenvattend Netwerkadres",
    "label.summary_prefix": "Samenvattende Prefix",
    "label.expanded_ipv6": "Volledig IPv6-adres",
    "label.abbreviated_ipv6": "Verkort IPv6-adres",
    "step.sum": "Tel de termen op: {terms} = {result}",
    "step.pad_nibbles": "Vul {value} aan met voorloopnullen tot {width} bits: {result}",
    "step.concatenate": "Voeg de groepen {parts} samen: {result}",
    "step.divide": "{dividend} ÷ {divisor} = {quotient} rest {remainder}",
    "step.read_remainders": "Lees de restwaarden van onder naar boven: {result}",
    "step.mask_from_prefix": "/{prefix} als subnetmasker: {result}",
    "step.prefix_from_mask": "Tel de 1-bits in {mask}: {result}",
    "step.bitwise_and": "Netwerkadres: {ip} AND {mask} = {result}",
    "step.bitwise_or": "Broadcastadres: {network} OR {wildcard} = {result}",
    "step.first_host": "Eerste bruikbare host: {network} + 1 = {result}",
    "step.last_host": "Laatste bruikbare host: {broadcast} - 1 = {result}",
    "step.host_count": "Host-bits: 32 - {prefix} = {host_bits}; 2^{host_bits} - 2 = {total} - 2 = {result} bruikbare hosts",
    "step.sort_departments": "Rangschik afdelingen op aantal hosts: {order}",
    "step.vlsm_allocate": (
        "{department} heeft {hosts} hosts nodig, vereist {host_bits} host-bits "
        "(2^{host_bits} - 2 = {usable}), dus een /{prefix} subnet: {result}"
    ),
    "step.acl_pair": "De ACL gebruikt het netwerkadres met het wildcard-masker: {result}",
    "step.host_bits": "{hosts} hosts hebben {host_bits} host-bits nodig (2^{host_bits} - 2 = {usable})",
    "step.subnet_bits": "{count} subnetten hebben {subnet_bits} subnet-bits nodig (2^{subnet_bits} = {subnets})",
    "step.add_prefix_bits": "Nieuwe prefix: /{base_prefix} + {bits} = {result}",
    "step.host_bits_from_prefix": "Host-bits: 32 - {prefix} = {result}",
    "step.subnet_n": "Subnet {number}: basis + ({number} - 1) × {block} adressen = {result}",
    "step.summary_bits": "{count} netwerken = 2^{bits}, dus de samenvattende prefix is 24 - {bits} = {result}",
    "step.ipv6_fill_zero_run": "Vervang '::' in {address} door {missing} nulgroepen",
    "step.ipv6_pad_groups": "Vul elke groep aan tot 4 hexadecimale cijfers: {result}",
    "step.ipv6_strip_leading_zeros": "Verwijder voorloopnullen in elke groep: {result}",
    "step.ipv6_compress_zero_run": "Vervang {length} opeenvolgende nulgroepen op positie {position} door '::': {result}",
}

PHRASES: dict[str, dict[str, str]] = {
    "en": ENGLISH,
    "nl": DUTCH,
}


class PhraseTable:
    """Templates for one locale with an optional fallback table."""

    def __init__(
        self,
        locale: str,
        phrases: Mapping[str, str],
        fallback: Mapping[str, str] | None = None,
    ):
        self.locale = locale
        self._phrases = phrases
        self._fallback = fallback or {}

    def has(self, key: str) -> bool:
        return key in self._phrases or key in self._fallback

    def template(self, key: str) -> str:
        """Raw template for a key; the key itself when no table defines it."""
        if key in self._phrases:
            return self._phrases[key]
        if key in self._fallback:
            return self._fallback[key]
        logger.warning(f"No phrase for {key!r} in locale {self.locale!r}")
        return key

    def text(self, key: str, **values: object) -> str:
        """Format the template for `key` with the given values."""
        return self.template(key).format(**values)


@lru_cache(maxsize=8)
def _table(locale: str) -> PhraseTable:
    fallback = PHRASES[FALLBACK_LOCALE] if locale != FALLBACK_LOCALE else None
    return PhraseTable(locale, PHRASES[locale], fallback)


def get_phrase_table(locale: str | None = None) -> PhraseTable:
    """
    Phrase table for a locale (the configured default when None).

    Raises:
        InvalidParameterError: If the locale is not supported.
    """
    settings = get_settings()
    code = (locale or settings.default_locale).strip().lower()
    supported = [name for name in settings.get_supported_locales() if name in PHRASES]
    if code not in supported:
        raise InvalidParameterError("locale", locale, supported)
    return _table(code)
