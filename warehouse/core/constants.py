EXIT_TYPE_SHIPMENT = "Expedição"
EXIT_TYPE_FULL = "Full"
EXIT_TYPES = (EXIT_TYPE_SHIPMENT, EXIT_TYPE_FULL)

STORES = ("Shein", "Amazon", "Mercado Livre", "Shopee", "Magazine Luiza")

STATUS_OK = "OK"
STATUS_REPURCHASE = "REPURCHASE"
STATUS_STAGNANT = "STAGNANT"

LOCATION_OCCUPIED = "Ocupado"
LOCATION_FREE = "Livre"

STAGNANT_AFTER_DAYS = 30

ROLE_ADMIN = "ADMIN"
ROLE_USER = "USUARIO"

TARGET_PRODUCT = "PRODUCT"
TARGET_LOCATION = "LOCATION"
DELETION_TARGETS = (TARGET_PRODUCT, TARGET_LOCATION)

REQUEST_PENDING = "PENDING"
REQUEST_APPROVED = "APPROVED"
REQUEST_REJECTED = "REJECTED"
