"""Country reference table and per-country coverage of the bank book"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from capacity_gateway.domain.models import GLOBAL_COUNTRY, Bank, Project
from capacity_gateway.domain.ranking import is_local_bank, operates_in_country


@dataclass(frozen=True)
class Country:
    code: str  # ISO 3166-1 alpha-2
    name: str
    region: str


_COUNTRY_ROWS: Tuple[Tuple[str, str, str], ...] = (
    # Africa
    ("DZ", "Algeria", "Africa"),
    ("AO", "Angola", "Africa"),
    ("BJ", "Benin", "Africa"),
    ("BW", "Botswana", "Africa"),
    ("BF", "Burkina Faso", "Africa"),
    ("BI", "Burundi", "Africa"),
    ("CV", "Cabo Verde", "Africa"),
    ("CM", "Cameroon", "Africa"),
    ("CF", "Central African Republic", "Africa"),
    ("TD", "Chad", "Africa"),
    ("KM", "Comoros", "Africa"),
    ("CG", "Congo", "Africa"),
    ("CD", "Congo (Democratic Republic)", "Africa"),
    ("CI", "Cote d'Ivoire", "Africa"),
    ("DJ", "Djibouti", "Africa"),
    ("EG", "Egypt", "Africa"),
    ("GQ", "Equatorial Guinea", "Africa"),
    ("ER", "Eritrea", "Africa"),
    ("SZ", "Eswatini", "Africa"),
    ("ET", "Ethiopia", "Africa"),
    ("GA", "Gabon", "Africa"),
    ("GM", "Gambia", "Africa"),
    ("GH", "Ghana", "Africa"),
    ("GN", "Guinea", "Africa"),
    ("GW", "Guinea-Bissau", "Africa"),
    ("KE", "Kenya", "Africa"),
    ("LS", "Lesotho", "Africa"),
    ("LR", "Liberia", "Africa"),
    ("LY", "Libya", "Africa"),
    ("MG", "Madagascar", "Africa"),
    ("MW", "Malawi", "Africa"),
    ("ML", "Mali", "Africa"),
    ("MR", "Mauritania", "Africa"),
    ("MU", "Mauritius", "Africa"),
    ("MA", "Morocco", "Africa"),
    ("MZ", "Mozambique", "Africa"),
    ("NA", "Namibia", "Africa"),
    ("NE", "Niger", "Africa"),
    ("NG", "Nigeria", "Africa"),
    ("RW", "Rwanda", "Africa"),
    ("ST", "Sao Tome and Principe", "Africa"),
    ("SN", "Senegal", "Africa"),
    ("SC", "Seychelles", "Africa"),
    ("SL", "Sierra Leone", "Africa"),
    ("SO", "Somalia", "Africa"),
    ("ZA", "South Africa", "Africa"),
    ("SS", "South Sudan", "Africa"),
    ("SD", "Sudan", "Africa"),
    ("TZ", "Tanzania", "Africa"),
    ("TG", "Togo", "Africa"),
    ("TN", "Tunisia", "Africa"),
    ("UG", "Uganda", "Africa"),
    ("ZM", "Zambia", "Africa"),
    ("ZW", "Zimbabwe", "Africa"),
    # Americas
    ("AG", "Antigua and Barbuda", "Americas"),
    ("AR", "Argentina", "Americas"),
    ("BS", "Bahamas", "Americas"),
    ("BB", "Barbados", "Americas"),
    ("BZ", "Belize", "Americas"),
    ("BO", "Bolivia", "Americas"),
    ("BR", "Brazil", "Americas"),
    ("CA", "Canada", "Americas"),
    ("CL", "Chile", "Americas"),
    ("CO", "Colombia", "Americas"),
    ("CR", "Costa Rica", "Americas"),
    ("CU", "Cuba", "Americas"),
    ("DM", "Dominica", "Americas"),
    ("DO", "Dominican Republic", "Americas"),
    ("EC", "Ecuador", "Americas"),
    ("SV", "El Salvador", "Americas"),
    ("GD", "Grenada", "Americas"),
    ("GT", "Guatemala", "Americas"),
    ("GY", "Guyana", "Americas"),
    ("HT", "Haiti", "Americas"),
    ("HN", "Honduras", "Americas"),
    ("JM", "Jamaica", "Americas"),
    ("MX", "Mexico", "Americas"),
    ("NI", "Nicaragua", "Americas"),
    ("PA", "Panama", "Americas"),
    ("PY", "Paraguay", "Americas"),
    ("PE", "Peru", "Americas"),
    ("KN", "Saint Kitts and Nevis", "Americas"),
    ("LC", "Saint Lucia", "Americas"),
    ("VC", "Saint Vincent and the Grenadines", "Americas"),
    ("SR", "Suriname", "Americas"),
    ("TT", "Trinidad and Tobago", "Americas"),
    ("US", "United States", "Americas"),
    ("UY", "Uruguay", "Americas"),
    ("VE", "Venezuela", "Americas"),
    # Asia
    ("AF", "Afghanistan", "Asia"),
    ("BD", "Bangladesh", "Asia"),
    ("BT", "Bhutan", "Asia"),
    ("BN", "Brunei", "Asia"),
    ("KH", "Cambodia", "Asia"),
    ("CN", "China", "Asia"),
    ("HK", "Hong Kong", "Asia"),
    ("IN", "India", "Asia"),
    ("ID", "Indonesia", "Asia"),
    ("JP", "Japan", "Asia"),
    ("KZ", "Kazakhstan", "Asia"),
    ("KG", "Kyrgyzstan", "Asia"),
    ("LA", "Laos", "Asia"),
    ("MO", "Macao", "Asia"),
    ("MY", "Malaysia", "Asia"),
    ("MV", "Maldives", "Asia"),
    ("MN", "Mongolia", "Asia"),
    ("MM", "Myanmar", "Asia"),
    ("NP", "Nepal", "Asia"),
    ("KP", "North Korea", "Asia"),
    ("PK", "Pakistan", "Asia"),
    ("PH", "Philippines", "Asia"),
    ("SG", "Singapore", "Asia"),
    ("KR", "South Korea", "Asia"),
    ("LK", "Sri Lanka", "Asia"),
    ("TW", "Taiwan", "Asia"),
    ("TJ", "Tajikistan", "Asia"),
    ("TH", "Thailand", "Asia"),
    ("TL", "Timor-Leste", "Asia"),
    ("TM", "Turkmenistan", "Asia"),
    ("UZ", "Uzbekistan", "Asia"),
    ("VN", "Vietnam", "Asia"),
    # Europe
    ("AL", "Albania", "Europe"),
    ("AD", "Andorra", "Europe"),
    ("AM", "Armenia", "Europe"),
    ("AT", "Austria", "Europe"),
    ("AZ", "Azerbaijan", "Europe"),
    ("BY", "Belarus", "Europe"),
    ("BE", "Belgium", "Europe"),
    ("BA", "Bosnia and Herzegovina", "Europe"),
    ("BG", "Bulgaria", "Europe"),
    ("HR", "Croatia", "Europe"),
    ("CY", "Cyprus", "Europe"),
    ("CZ", "Czechia", "Europe"),
    ("DK", "Denmark", "Europe"),
    ("EE", "Estonia", "Europe"),
    ("FI", "Finland", "Europe"),
    ("FR", "France", "Europe"),
    ("GE", "Georgia", "Europe"),
    ("DE", "Germany", "Europe"),
    ("GR", "Greece", "Europe"),
    ("HU", "Hungary", "Europe"),
    ("IS", "Iceland", "Europe"),
    ("IE", "Ireland", "Europe"),
    ("IT", "Italy", "Europe"),
    ("XK", "Kosovo", "Europe"),
    ("LV", "Latvia", "Europe"),
    ("LI", "Liechtenstein", "Europe"),
    ("LT", "Lithuania", "Europe"),
    ("LU", "Luxembourg", "Europe"),
    ("MT", "Malta", "Europe"),
    ("MD", "Moldova", "Europe"),
    ("MC", "Monaco", "Europe"),
    ("ME", "Montenegro", "Europe"),
    ("NL", "Netherlands", "Europe"),
    ("MK", "North Macedonia", "Europe"),
    ("NO", "Norway", "Europe"),
    ("PL", "Poland", "Europe"),
    ("PT", "Portugal", "Europe"),
    ("RO", "Romania", "Europe"),
    ("RU", "Russia", "Europe"),
    ("SM", "San Marino", "Europe"),
    ("RS", "Serbia", "Europe"),
    ("SK", "Slovakia", "Europe"),
    ("SI", "Slovenia", "Europe"),
    ("ES", "Spain", "Europe"),
    ("SE", "Sweden", "Europe"),
    ("CH", "Switzerland", "Europe"),
    ("TR", "Turkey", "Europe"),
    ("UA", "Ukraine", "Europe"),
    ("GB", "United Kingdom", "Europe"),
    ("VA", "Vatican City", "Europe"),
    # Middle East
    ("BH", "Bahrain", "Middle East"),
    ("IR", "Iran", "Middle East"),
    ("IQ", "Iraq", "Middle East"),
    ("IL", "Israel", "Middle East"),
    ("JO", "Jordan", "Middle East"),
    ("KW", "Kuwait", "Middle East"),
    ("LB", "Lebanon", "Middle East"),
    ("OM", "Oman", "Middle East"),
    ("PS", "Palestine", "Middle East"),
    ("QA", "Qatar", "Middle East"),
    ("SA", "Saudi Arabia", "Middle East"),
    ("SY", "Syria", "Middle East"),
    ("AE", "United Arab Emirates", "Middle East"),
    ("YE", "Yemen", "Middle East"),
    # Oceania
    ("AU", "Australia", "Oceania"),
    ("FJ", "Fiji", "Oceania"),
    ("KI", "Kiribati", "Oceania"),
    ("MH", "Marshall Islands", "Oceania"),
    ("FM", "Micronesia", "Oceania"),
    ("NR", "Nauru", "Oceania"),
    ("NZ", "New Zealand", "Oceania"),
    ("PW", "Palau", "Oceania"),
    ("PG", "Papua New Guinea", "Oceania"),
    ("WS", "Samoa", "Oceania"),
    ("SB", "Solomon Islands", "Oceania"),
    ("TO", "Tonga", "Oceania"),
    ("TV", "Tuvalu", "Oceania"),
    ("VU", "Vanuatu", "Oceania"),
)

COUNTRIES: Mapping[str, Country] = MappingProxyType(
    {code: Country(code, name, region) for code, name, region in _COUNTRY_ROWS}
)


def _group_regions() -> Dict[str, Tuple[str, ...]]:
    regions: Dict[str, List[str]] = {}
    for country in COUNTRIES.values():
        regions.setdefault(country.region, []).append(country.code)
    return {region: tuple(codes) for region, codes in regions.items()}


# Region name -> country codes, in table order
REGIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType(_group_regions())


def get_country(code: str, table: Mapping[str, Country] = COUNTRIES) -> Optional[Country]:
    return table.get(code)


def is_known_country(code: str, allow_global: bool = False, table: Mapping[str, Country] = COUNTRIES) -> bool:
    """Check a code against the table; GLOBAL only counts where a bank may use it"""
    if allow_global and code == GLOBAL_COUNTRY:
        return True
    return code in table


@dataclass
class CountryCoverage:
    """Banks able to serve a country, their spare capacity, and the country's projects"""

    country: Country
    banks: List[Bank] = field(default_factory=list)
    local_bank_ids: List[str] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)

    @property
    def available_capacity(self) -> float:
        # Overdrawn banks subtract from the total
        return sum(bank.available_capacity for bank in self.banks)


def country_coverage(country: Country, banks: Sequence[Bank], projects: Sequence[Project]) -> CountryCoverage:
    """Collect the banks operating in a country (GLOBAL banks included) and its projects"""
    serving = [bank for bank in banks if operates_in_country(bank, country.code)]
    return CountryCoverage(
        country=country,
        banks=serving,
        local_bank_ids=[bank.id for bank in serving if is_local_bank(bank, country.code)],
        projects=[project for project in projects if project.country == country.code],
    )
