from models import Rule

# Store compliance rulebook. Changing it only changes the prompt text sent to
# the model, never how replies are reduced.
RULES_VERSION = "1.0"

RULES = (
    Rule(
        id="Rule 1",
        name="Aisle Arrangement Rules",
        description=(
            "Aisles must be wide enough for two-way traffic.",
            "No product pallets left in the middle of aisles.",
            "Promotional stands must not block main walkways.",
            "No carts or trolleys parked in aisles.",
            "Directional signage must be clearly visible.",
            "End caps must only display allowed promotional items.",
        ),
    ),
    Rule(
        id="Rule 2",
        name="Checkout Counter Rules",
        description=(
            "No water bottles on the checkout counter.",
            "No helmets on the checkout counter.",
            "Checkout counter must be free of personal belongings.",
            "Checkout counter must have a visible POS system.",
            "No clutter (bags, boxes, etc.) on the counter.",
            "Promotional material must be within the designated space.",
            "Only one queue per checkout counter.",
            "No food items stored under or behind the checkout counter.",
            "Staff must not place their phones on the counter.",
            "Trash bins must not be visible near the checkout counter.",
        ),
    ),
    Rule(
        id="Rule 3",
        name="Display & Promotion Rules",
        description=(
            "Promotions must be displayed in specified zones.",
            "No handwritten promotion signs (unless policy allows).",
            "All discount tags must be legible and properly printed.",
            "Shelf talkers must not cover product branding.",
            "Product stacking for promotion must not exceed safety limits.",
            "No conflicting brands on the same promo stand.",
        ),
    ),
    Rule(
        id="Rule 4",
        name="Entrance & Exit Rules",
        description=(
            "No trolleys blocking the entrance.",
            "Entry/exit signage must be visible.",
            "Entrance doors must be clean and transparent.",
            "Entry area must not contain advertising boards on the floor.",
        ),
    ),
    Rule(
        id="Rule 5",
        name="Floor & Cleanliness Rules",
        description=(
            "No litter on the floor.",
            "Aisles must be clear of any obstacles.",
            "No liquid spills visible on the floor.",
            "Mop buckets or cleaning tools must not be left unattended.",
            "No open boxes or packaging lying on the floor.",
            "No personal items (e.g., staff bags) on the floor.",
            "Entrance mats must be flat and clean.",
            "Waste bins must not be overflowing.",
        ),
    ),
    Rule(
        id="Rule 6",
        name="Other General Rules",
        description=(
            "No unauthorized persons in staff-only zones.",
            "Security cameras must not be blocked.",
            "Lighting must be adequate and all bulbs functional.",
            "Ceiling panels must be intact (no water damage/stains).",
            "Store branding (logo, slogan) must be clean and visible.",
            "No handwritten correction over printed price tags.",
            "Shopping baskets must be clean and stacked in racks.",
            "Trolley area must be organized.",
        ),
    ),
    Rule(
        id="Rule 7",
        name="Product Placement Rules",
        description=(
            "Milk must be placed in the refrigerated section.",
            "Frozen foods must be in freezers only.",
            "Non-edible items (e.g., cleaning products) must not be near food items.",
            "Eggs must be kept in a temperature-controlled display.",
            "Alcoholic beverages must be placed in designated areas only.",
            "Children's products (e.g., toys) must not be placed near alcohol.",
        ),
    ),
    Rule(
        id="Rule 8",
        name="Refrigerator/Freezer Rules",
        description=(
            "Refrigerator doors must be closed.",
            "Frost or ice buildup should not be visible.",
            "No condensation puddles under refrigerators.",
            "Items must be within the max/min temperature limits.",
        ),
    ),
    Rule(
        id="Rule 9",
        name="Safety & Accessibility Rules",
        description=(
            "Fire exits must be unobstructed.",
            "Emergency signage must be clearly visible.",
            "No items stacked above head height.",
            "Accessibility ramps must not be blocked.",
            "No wet floor without a warning sign.",
            "Electrical panels must not be blocked.",
        ),
    ),
    Rule(
        id="Rule 10",
        name="Shelf Stocking Rules",
        description=(
            "Shelves must not be empty.",
            "Products must face forward (front-facing visibility).",
            "No expired products on shelves.",
            "Products must be aligned and not tilted.",
            "Price tags must be present and aligned with products.",
            "No gaps between product facings.",
            "No mixed products in a single facing row.",
            "Overhanging products are not allowed.",
            "Top shelf must not exceed maximum load limit.",
            "Bottom shelves must not have items on the floor beneath them.",
            "Promotional products must be tagged clearly.",
            "Products must match the store's planogram.",
            "No double stacking unless specified.",
        ),
    ),
    Rule(
        id="Rule 11",
        name="Staff Behavior Rules",
        description=(
            "Staff must wear uniform or ID badge.",
            "Staff must not be eating on the floor.",
            "No sleeping or resting in product aisles.",
            "Mobile phone usage must be in break zones only.",
        ),
    ),
    Rule(
        id="Rule 12",
        name="Warehouse/Backroom Rules",
        description=(
            "No clutter in the delivery area.",
            "Products must not be stored on the ground.",
            "Pallets must be stacked safely.",
            "No expired inventory mixed with fresh stock.",
        ),
    ),
)


def get_rules():
    return RULES
