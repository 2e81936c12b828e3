import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.calculator import CircuitCalculator
from core.converters import round_up_hundredth
from core.errors import InvalidInputError

# --- RV hookups and campground pedestals (NEC Article 551) ---

@dataclass(frozen=True)
class RVHookupType:
    name: str
    amperage: int
    voltage: int
    configuration: str
    outlet: str
    description: str = ""

RV_HOOKUP_TYPES = [
    RVHookupType("30A RV Hookup (TT-30)", 30, 120, "3-wire (Hot-Neutral-Ground)", "NEMA TT-30R",
                 "Standard RV hookup for smaller units"),
    RVHookupType("50A RV Hookup (14-50)", 50, 240, "4-wire (Hot-Hot-Neutral-Ground)", "NEMA 14-50R",
                 "Large RV hookup for big rigs"),
    RVHookupType("Multiple 30A Hookups", 30, 120, "3-wire per hookup", "Multiple TT-30R outlets",
                 "Multiple 30A pedestals"),
    RVHookupType("Multiple 50A Hookups", 50, 240, "4-wire per hookup", "Multiple 14-50R outlets",
                 "Multiple 50A pedestals"),
]

@dataclass(frozen=True)
class RVSite:
    name: str
    demand_factor: float
    description: str = ""

# NEC 551.73 demand factors by number of sites
RV_SITES = [
    RVSite("Residential Driveway", 1.0, "Single RV hookup at home"),
    RVSite("Small Campground (2-5 sites)", 0.9, "High occupancy expected"),
    RVSite("Medium Campground (6-20 sites)", 0.8, "Moderate diversity factor"),
    RVSite("Large Campground (21+ sites)", 0.7, "Significant diversity factor per NEC 551.73"),
]

@dataclass(frozen=True)
class PedestalType:
    name: str
    features: Tuple[str, ...]
    description: str = ""

PEDESTAL_TYPES = [
    PedestalType("Basic Utility Post", ("Weather-resistant outlet", "GFCI protection"),
                 "Simple post-mounted outlet"),
    PedestalType("Standard RV Pedestal",
                 ("Weather-resistant outlet", "GFCI protection", "Circuit breaker", "Metering capability"),
                 "Commercial-grade pedestal with breaker"),
    PedestalType("Premium RV Pedestal",
                 ("Multiple outlets", "Individual metering", "Surge protection", "LED lighting",
                  "Cable/phone connections"),
                 "Full-service pedestal with amenities"),
]

@dataclass
class RVHookupCalculator(CircuitCalculator):
    hookup: RVHookupType = RV_HOOKUP_TYPES[1]
    site: RVSite = RV_SITES[0]
    pedestal: PedestalType = PEDESTAL_TYPES[1]
    distance_ft: float = 150
    hookups: int = 1
    gfci: bool = True
    surge_protection: bool = False

    name = "RV Hookup"

    def total_load(self) -> float:
        if self.hookups < 1:
            raise InvalidInputError("hookups", "must be at least 1")
        return round_up_hundredth(self.hookup.amperage * self.hookups * self.site.demand_factor)

    def design_current(self) -> float:
        return self.total_load()

    def circuit_voltage(self) -> float:
        return 240 if self.hookup.voltage == 240 else 120

    def recommended_breaker(self) -> int:
        """Pedestal breaker: 30A for TT-30, 50A for 14-50."""
        return 30 if self.hookup.amperage == 30 else 50

    def overcurrent_device_rating(self) -> Optional[int]:
        # A shared feeder gets a breaker sized from the demand load
        return self.recommended_breaker() if self.hookups == 1 else None

    def advisories(self) -> List[str]:
        notes = []
        if not self.gfci:
            notes.append("GFCI protection required for all RV outlets per NEC 551.71")
        if self.distance_ft > 200:
            notes.append("Long runs may require larger conductors - verify voltage at pedestal")
        if self.hookups > 1 and self.site.demand_factor == 1.0:
            notes.append("Consider demand factors for multiple RV hookups per NEC 551.73")
        if self.hookup.voltage == 120 and self.distance_ft > 100:
            notes.append("120V circuits over 100 feet may have voltage drop issues")
        if not self.surge_protection and self.hookup.amperage >= 50:
            notes.append("Consider surge protection for expensive RV electronics")
        if "Multiple" in self.hookup.name and self.hookups < 2:
            notes.append("Multiple hookup type selected but only 1 hookup specified")
        notes.extend([
            "Install weatherproof outlet rated for outdoor use",
            "Use proper RV-rated outlet (TT-30R or 14-50R)",
            "Install at proper height (18-24 inches above ground)",
            "Provide adequate working space per NEC 110.26",
        ])
        return notes

# --- Garage and outbuilding subpanels (NEC Article 225) ---

@dataclass(frozen=True)
class SubpanelSize:
    name: str
    amperage: int
    description: str = ""

SUBPANEL_SIZES = [
    SubpanelSize("60A", 60, "Basic garage lighting, outlets, and small tools"),
    SubpanelSize("100A", 100, "Standard garage with moderate tools and EV charging"),
    SubpanelSize("125A", 125, "Large garage with heavy equipment"),
    SubpanelSize("150A", 150, "Workshop or commercial garage"),
    SubpanelSize("200A", 200, "Full workshop or multi-bay garage"),
]

@dataclass(frozen=True)
class GarageLoadProfile:
    name: str
    lighting_va_per_sqft: float
    outlet_va: float
    continuous_factor: float
    description: str = ""

GARAGE_LOAD_PROFILES = [
    GarageLoadProfile("Basic Garage", 3, 180, 0.8, "Minimal electrical loads"),
    GarageLoadProfile("Home Workshop", 5, 180, 0.85, "Moderate tool usage"),
    GarageLoadProfile("Professional Workshop", 7, 180, 0.9, "Heavy equipment and tools"),
]

@dataclass(frozen=True)
class FeederInstallation:
    name: str
    description: str
    temperature_rating: int
    notes: str = ""

FEEDER_INSTALLATIONS = [
    FeederInstallation("Underground (Direct Burial)", "USE-2 cable direct buried", 90,
                       "Most common for detached garages"),
    FeederInstallation("Underground (in Conduit)", "THWN-2 in underground conduit", 90,
                       "Better protection, easier maintenance"),
    FeederInstallation("Overhead (Service Drop)", "Overhead triplex or individual conductors", 75,
                       "Less expensive installation"),
    FeederInstallation("Attached Garage (Interior)", "THWN-2 in conduit through structure", 90,
                       "For garages attached to house"),
]

@dataclass
class GarageSubpanelCalculator(CircuitCalculator):
    """Feeder to a garage subpanel.

    The feeder carries the larger of the panel rating and the calculated
    load: lighting VA per square foot plus general outlets, EV charger and
    240V tools at full load, times the profile's continuous factor.
    """
    panel: SubpanelSize = SUBPANEL_SIZES[1]
    load_profile: GarageLoadProfile = GARAGE_LOAD_PROFILES[1]
    installation: FeederInstallation = FEEDER_INSTALLATIONS[0]
    distance_ft: float = 100
    garage_sqft: float = 600
    outlets: int = 8
    ev_charger_amps: Optional[float] = None
    tool_amps: Optional[float] = None

    name = "Garage Subpanel"

    def calculated_load(self) -> float:
        if self.garage_sqft < 0:
            raise InvalidInputError("garage_sqft", "must not be negative")
        if self.outlets < 0:
            raise InvalidInputError("outlets", "must not be negative")
        va = self.garage_sqft * self.load_profile.lighting_va_per_sqft
        va += self.outlets * self.load_profile.outlet_va
        for amps in (self.ev_charger_amps, self.tool_amps):
            if amps:
                va += amps * 240
        return round_up_hundredth(va * self.load_profile.continuous_factor / 240)

    def recommended_panel(self) -> SubpanelSize:
        # 25% headroom over the calculated load
        required = math.ceil(self.calculated_load() * 1.25)
        for panel in SUBPANEL_SIZES:
            if panel.amperage >= required:
                return panel
        return SUBPANEL_SIZES[-1]

    def design_current(self) -> float:
        return max(self.panel.amperage, self.calculated_load())

    def circuit_voltage(self) -> float:
        return 240

    def advisories(self) -> List[str]:
        load = self.calculated_load()
        recommended = self.recommended_panel()
        notes = []
        if self.panel.amperage < recommended.amperage:
            notes.append(f"Consider {recommended.name} subpanel for calculated {load:.1f}A load")
        if self.distance_ft > 150:
            notes.append("Long feeder runs may require larger conductors for voltage drop")
        if "Underground" in self.installation.name and self.distance_ft > 100:
            notes.append("Consider PVC conduit for protection on long underground runs")
        if "Overhead" in self.installation.name and self.distance_ft > 75:
            notes.append("Overhead spans may require intermediate support poles")
        if self.ev_charger_amps and self.ev_charger_amps >= self.panel.amperage * 0.5:
            notes.append("EV charger load is significant - verify panel sizing")
        if self.garage_sqft > 800 and self.panel.amperage < 100:
            notes.append("Large garages typically require 100A+ service")
        notes.extend([
            "Install main disconnect at subpanel per NEC 225.31",
            "Subpanel requires separate grounding electrode per NEC 250.32",
            "Install GFCI protection for all 120V outlets in garage",
            "Separate neutral and ground in subpanel",
        ])
        return notes
