"""All tunable constants for the life simulation.

Every magic number in the codebase must reference this file.
"""

# =============================================================================
# STATE
# =============================================================================
STATE_VERSION: int = 2
STAT_NAMES: tuple[str, ...] = (
    "health",
    "happiness",
    "smarts",
    "looks",
    "karma",
    "athleticism",
    "craziness",
    "willpower",
    "fertility",
)
STAT_MIN: int = 0
STAT_MAX: int = 100
DEFAULT_HEALTH: int = 80
DEFAULT_HAPPINESS: int = 80
DEFAULT_STAT: int = 50

HOME: str = "Home"
SCHOOL: str = "School"
ARENA: str = "Arena"
COURT: str = "Court"
OFFICE: str = "Office"

YEARLY_TIME_BUDGET: int = 12      # months available at Home each year
DEFAULT_LOCATION_TIME: int = 10

# Raise ContentError on unknown condition/effect types instead of passing through
STRICT_CONTENT: bool = False

# =============================================================================
# HISTORY
# =============================================================================
HISTORY_PRIMARY: str = "primary"
HISTORY_SECONDARY: str = "secondary"
HISTORY_AGE_UP: str = "age_up"

# =============================================================================
# AGING & DEATH
# =============================================================================
HEALTH_DECLINE_AGE: int = 50
HEALTH_DECLINE_MAX: int = 3
LOOKS_DECLINE_AGE: int = 40
LOOKS_DECLINE_MAX: int = 2
SMARTS_CREEP_MAX: int = 2

HAPPY_HEAL_THRESHOLD: int = 80
HAPPY_HEAL_AMOUNT: int = 1
UNHAPPY_THRESHOLD: int = 20
UNHAPPY_DAMAGE: int = 2

DEBT_INTEREST_RATE: float = 0.05

OLD_AGE_START: int = 75
MAX_LIFESPAN: int = 122
MIN_OLD_AGE_DEATH_CHANCE: float = 0.01
HEALTH_LONGEVITY_WEIGHT: float = 0.1

# =============================================================================
# CHARACTER CREATION
# =============================================================================
TALENTS: tuple[str, ...] = (
    "Academic", "Athletic", "Artistic", "Business", "Crime",
    "Looks", "Music", "Political", "Social", "Voice",
)
PERSONALITY_TRAITS: tuple[str, ...] = (
    "Optimist", "Pessimist", "Lazy", "Ambitious",
    "Brave", "Coward", "Generous", "Selfish",
)
MAX_STARTING_TRAITS: int = 2

# stat -> (minimum, spread); roll is minimum + [0, spread)
BIRTH_STAT_ROLLS: dict[str, tuple[int, int]] = {
    "athleticism": (20, 60),
    "craziness": (10, 80),
    "willpower": (20, 60),
    "fertility": (20, 80),
    "smarts": (20, 60),
    "looks": (20, 80),
}

# =============================================================================
# FAMILY & RELATIONSHIPS
# =============================================================================
FAMILY_TYPES: tuple[str, ...] = ("Father", "Mother", "Brother", "Sister", "Child")
NON_ROMANCE_TYPES: tuple[str, ...] = FAMILY_TYPES + ("Pet", "Teacher")
ROMANCE_MIN_AGE: int = 13
CLOSE_BOND_THRESHOLD: int = 80

PARENT_MIN_AGE: int = 18
PARENT_AGE_SPREAD: int = 20
MAX_SIBLINGS: int = 2
SIBLING_AGE_SPREAD: int = 10
SIBLING_BOND: int = 80

FAMILIARITY_DECAY_MIN: int = 5
FAMILIARITY_DECAY_SPREAD: int = 15
NPC_MORTALITY_AGE: int = 60
NPC_MORTALITY_RATE: float = 0.02
BEREAVEMENT_HAPPINESS_LOSS: int = 30

CHILD_NAMES: tuple[str, ...] = ("Alex", "Jordan", "Casey", "Sam", "Riley", "Taylor", "Morgan", "Jamie")

SCHOOL_NPC_MINIMUM: int = 3

# =============================================================================
# ACTIVITIES
# =============================================================================
ACTIVITY_EFFICIENCY_CAP: float = 0.5
ACTIVITY_EXPERIENCE_SCALE: float = 100.0

# (threshold, multiplier) checked in order; stats below every threshold train at 1.0
NATURAL_POTENTIAL_TIERS: tuple[tuple[int, float], ...] = ((95, 0.1), (85, 0.3), (70, 0.6))

# =============================================================================
# EDUCATION
# =============================================================================
EDUCATION_RANK: dict[str, int] = {
    "None": 0,
    "Primary": 1,
    "Secondary": 2,
    "High School": 3,
    "Bachelor": 4,
    "Master": 5,
    "Doctorate": 6,
}

# (age, level, history text)
SCHOOL_MILESTONES: tuple[tuple[int, str, str], ...] = (
    (5, "Primary", "You started primary school."),
    (13, "Secondary", "You started secondary school."),
    (17, "High School", "You completed high school."),
)
COMPULSORY_SCHOOL_MAX_AGE: int = 17
SCHOOL_START_AGE: int = 5

DEFAULT_GPA: float = 2.5
GPA_MAX: float = 4.0
GPA_TARGET: float = 0.6
GPA_EFFORT_WEIGHT: float = 0.25
GPA_DELTA_MIN: float = -0.2
GPA_DELTA_MAX: float = 0.45

SCHOLARSHIP_CHANCE_MAX: float = 0.65
SCHOLARSHIP_SMARTS_PIVOT: int = 55
SCHOLARSHIP_EFFORT_BONUS: float = 0.05
SCHOLARSHIP_MIN_SHARE: float = 0.2
SCHOLARSHIP_SHARE_SPREAD: float = 0.3

DISMISSAL_GPA: float = 1.2
DISMISSAL_CHANCE: float = 0.35

BAR_EXAM_COST: int = 2500
BAR_PASS_MIN: float = 0.2
BAR_PASS_MAX: float = 0.93
BAR_SCORE_PIVOT: float = 55.0
BAR_SCORE_SCALE: float = 65.0

# =============================================================================
# CAREER
# =============================================================================
HIRE_CHANCE_MIN: float = 0.15
HIRE_CHANCE_MAX: float = 0.95
STARTING_PERFORMANCE: int = 55
DEFAULT_PERFORMANCE: int = 50

PERFORMANCE_DRIFT: int = 4
RAISE_PERFORMANCE: int = 72
PROMOTION_PERFORMANCE: int = 80
PROMOTION_MIN_YEARS: int = 2
PROMOTION_CHANCE: float = 0.55
PROMOTION_RAISE: float = 0.12
FIRING_PERFORMANCE: int = 25
FIRING_CHANCE: float = 0.25

FOUNDER_CAREER_ID: str = "engineering_founder"
STARTUP_COST: int = 40000
STARTUP_MIN_AGE: int = 25
STARTUP_MIN_LEVEL: int = 2
FOUNDER_MIN_SALARY: int = 20000
FOUNDER_SETBACK_CHANCE: float = 0.08
FOUNDER_SETBACK_SHARE: float = 0.2

# =============================================================================
# WRESTLING
# =============================================================================
WRESTLING_FIELD: str = "Wrestling"
WRESTLING_TRAIT: str = "Wrestling"
WRESTLING_TRYOUT_BUFFER: int = 15
WRESTLING_CONTRACT_YEARS: int = 5
WRESTLING_CONTACTS: int = 4
WRESTLING_RETIREMENT_AGE: int = 34

# (specialization substring, injury risk multiplier) checked in order
WRESTLING_STYLE_RISK: tuple[tuple[tuple[str, ...], float], ...] = (
    (("deathmatch", "hardcore"), 1.8),
    (("lucha",), 1.35),
    (("strong style",), 1.45),
    (("tag",), 0.92),
)
BACKSTAGE_TITLE_WORDS: tuple[str, ...] = ("writer", "producer", "booker")

RING_NAMES: tuple[str, ...] = (
    "Iron Pulse", "Silver Tempest", "North Star", "Atlas Prime",
    "Night Comet", "El Relampago", "Kitsune Strike",
)
WRESTLING_CONTACT_NAMES: tuple[str, ...] = (
    "Chris Vale", "Mika Storm", "Rico Blaze", "Noah Cross",
    "Aki Sato", "Lena Frost", "Diego Luna", "Tori King",
)
PROMOTION_NAMES: dict[str, str] = {
    "wwe": "WWE",
    "aew": "AEW",
    "njpw": "NJPW",
    "cmll": "CMLL",
    "global": "Global Free Agent Circuit",
    "backstage": "Backstage Creative",
    "indie": "Independent Circuit",
    "regional": "Regional Promotion",
}
RIVAL_PROMOTIONS: tuple[str, ...] = ("wwe", "aew", "njpw", "cmll", "global", "indie")

INJURY_CHANCE_MIN: float = 0.04
INJURY_CHANCE_MAX: float = 0.42
SEVERE_INJURY_CHANCE: float = 0.3

# =============================================================================
# SHADOW CRIME
# =============================================================================
SERIAL_UNLOCK_MIN_AGE: int = 18
SERIAL_UNLOCK_MIN_CRAZINESS: int = 70
SERIAL_UNLOCK_MAX_WILLPOWER: int = 55
SERIAL_ALIASES: tuple[str, ...] = ("Night Ledger", "Paper Ghost", "Cold Witness", "Nocturne", "Quiet Null")

HEAT_DECAY_DOUBLE_LIFE: int = 12
HEAT_DECAY_DEFAULT: int = 7
NOTORIETY_DECAY: int = 2
CAPTURE_HEAT: int = 70
CAPTURE_SPREAD: float = 130.0
BOTCHED_CONTRACT_HEAT: int = 12

# =============================================================================
# POLITICS
# =============================================================================
DEFAULT_APPROVAL: int = 50
DEFAULT_OPPOSITION: int = 50
DEFAULT_GOVERNMENT: str = "democracy"
PARTIES: tuple[str, ...] = ("progressive", "conservative", "centrist", "libertarian")
INDEPENDENT: str = "independent"
POLITICS_FIELD: str = "Politics"

CAMPAIGN_CONTRIBUTION: int = 5000
RALLY_COST: int = 5000
LOBBY_CORRUPTION_PER: int = 10000
LOBBY_CORRUPTION_BASE: int = 5

WIN_CHANCE_MIN: float = 0.05
WIN_CHANCE_MAX: float = 0.95
WIN_BASE: float = 0.30
WIN_APPROVAL_WEIGHT: float = 0.35
WIN_FUNDING_WEIGHT: float = 0.20
WIN_PARTY_WEIGHT: float = 0.15
WIN_ENDORSEMENT_WEIGHT: float = 0.10
WIN_STAT_WEIGHT: float = 0.10
WIN_INCUMBENT_BONUS: float = 0.05
WIN_MAJOR_BONUS: float = 0.10
WIN_NOISE: float = 0.05
WIN_SCANDAL_PENALTY: float = 0.15
WIN_LOW_APPROVAL: int = 30
WIN_LOW_APPROVAL_PENALTY: float = 0.10
RIGGED_BONUS: float = 0.25
RIGGED_CORRUPTION: int = 30
RIG_MIN_CORRUPTION: int = 20  # corruption needed before rigging is offered
PARTY_BASE_SUPPORT: int = 35
INDEPENDENT_BASE_SUPPORT: int = 10
ENDORSEMENT_VALUE: float = 0.02
ENDORSEMENT_CAP: float = 0.10
POLITICAL_MAJOR: str = "Political Science"

ANNUAL_APPROVAL_DECAY: int = 2
CHARISMA_HIGH: int = 70
CHARISMA_LOW: int = 30
CHARISMA_SWING: int = 2
STRONG_ECONOMY_ROLL: float = 0.75
WEAK_ECONOMY_ROLL: float = 0.20
POLICY_BONUS_CAP: int = 10

IMPEACHMENT_SCANDALS: int = 3
IMPEACHMENT_CORRUPTION: int = 60
IMPEACHMENT_RISK_THRESHOLD: int = 70
IMPEACHMENT_CHANCE: float = 0.3
SCANDAL_IMPEACHMENT_RISK: int = 40

SCANDAL_CHANCE_MAX: float = 0.95
REVOLUTION_LEVEL: int = 5
REVOLUTION_CHANCE_MAX: float = 0.9

COUP_MIN_LEVEL: int = 2
COUP_MIN_MILITARY: int = 50
COUP_MIN_CRAZINESS: int = 40
COUP_CHANCE_CAP: float = 0.85
SUPREME_LEADER_ID: str = "supreme_leader"
SUPREME_LEADER_TITLE: str = "Supreme Leader"
SUPREME_LEADER_SALARY: int = 1_000_000

# =============================================================================
# AUTOPLAY
# =============================================================================
# Action id (or id prefix ending in "_") -> base desirability; unlisted actions score 1.0
AUTOPLAY_PRIORITIES: dict[str, float] = {
    "take_bar_exam": 6.0,
    "apply_": 5.0,
    "enroll_": 4.0,
    "study_hard": 3.0,
    "work_hard": 3.0,
    "wrestling_tryout": 3.0,
    "wrestling_negotiate_push": 2.5,
    "wrestling_work_house_show": 2.5,
    "wrestling_rehab": 4.0,
    "declare_candidacy_": 2.0,
    "fund_campaign": 2.5,
    "hold_rally": 2.0,
    "join_political_party": 2.0,
    "enact_policy_": 2.0,
    "resolve_election": 0.5,
}
# Never chosen by the autoplayer: career-ending, lethal or criminal choices
AUTOPLAY_EXCLUDED: tuple[str, ...] = (
    "resign_job",
    "wrestling_retire",
    "wrestling_accept_rival_offer",
    "stage_coup",
    "unlock_serial_path",
    "serial_",
    "purge_rivals",
    "declare_state_of_emergency",
    "resolve_election_rigged",
)
AUTOPLAY_NOISE: float = 1.5
AUTOPLAY_POLITICAL_INTEREST: float = 0.25
AUTOPLAY_MAX_ACTIONS_PER_YEAR: int = 24
AUTOPLAY_IDLE_SPOTS: tuple[str, ...] = ("Gym", "Movies")

# Where to go for each kind of work, and how to get there
TRAVEL_ACTIONS: dict[str, str] = {
    HOME: "go_home",
    SCHOOL: "go_to_school",
    OFFICE: "go_to_office",
    COURT: "go_to_court",
    ARENA: "go_to_arena",
    "Gym": "go_to_gym",
    "Movies": "go_to_movies",
}

# =============================================================================
# RUNNERS
# =============================================================================
DEFAULT_MAX_YEARS: int = 130
FIRST_NAMES: tuple[str, ...] = ("Avery", "Blake", "Charlie", "Dana", "Emery", "Finley", "Harper", "Quinn")
LAST_NAMES: tuple[str, ...] = ("Smith", "Garcia", "Nguyen", "Okafor", "Kowalski", "Silva", "Tanaka", "Murphy")
GENDERS: tuple[str, ...] = ("Male", "Female")
COUNTRIES: tuple[str, ...] = ("United States", "Canada", "United Kingdom", "Mexico", "Japan", "Australia")
REPORT_DPI: int = 150
