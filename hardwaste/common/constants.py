"""Application constants."""

USER_AGENT = "curl/8.17.0"

DIRECTORY_URL = "https://australia-streets.openalfa.com/shire-of-yarra-ranges"
DIRECTORY_BASE_URL = "https://australia-streets.openalfa.com"
ADDRESS_SEARCH_URL = "https://www.yarraranges.vic.gov.au/api/v1/myarea/search"
WASTE_SERVICES_URL = "https://www.yarraranges.vic.gov.au/ocapi/Public/myarea/wasteservices"
WASTE_SERVICES_PARAMS = (
    ("ocsvclang", "en-AU"),
    ("pageLink", "/Our-services/Waste/Find-your-waste-collection-and-burning-off-dates"),
)

REGION_LINK_SELECTOR = ".columns > ul > li > a"
STREET_LABEL_SELECTOR = ".street-columns > ul > li > label"
SERVICE_ARTICLE_SELECTOR = "article"
SERVICE_HEADING_SELECTOR = "h3"
NEXT_SERVICE_SELECTOR = ".next-service"

TARGET_CATEGORY = "Hard waste, bundled branches and metals"
PICKUP_UNAVAILABLE_TEXT = "Not available at this address"
PICKUP_DATE_FORMATS = (
    "%d %B %Y",
    "%d %b %Y",
    "%a %d/%m/%Y",
)

GEOJSON_PATH = "viz/points.geojson"
DATE_PALETTE = (
    "#e6194b",
    "#3cb44b",
    "#4363d8",
    "#f58231",
    "#911eb4",
    "#46f0f0",
    "#f032e6",
    "#bcf60c",
    "#008080",
    "#9a6324",
    "#800000",
    "#000075",
)

EXIT_SUCCESS = 0
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "region",
    "query",
    "address_id",
    "subject",
    "event",
    "status",
    "duration_ms",
    "count",
    "error_code",
    "message",
)
