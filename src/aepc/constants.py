# Reserved numbers shared by every generated API. Changing any of them breaks
# wire compatibility with previously published services.

FIELD_PARENT_NAME = "parent"
FIELD_PARENT_NUMBER = 1

FIELD_ID_NAME = "id"
FIELD_ID_NUMBER = 2

FIELD_PATH_NAME = "path"
FIELD_PATH_NUMBER = 1

FIELD_PAGE_TOKEN_NAME = "page_token"
FIELD_PAGE_TOKEN_NUMBER = 10010

FIELD_NEXT_PAGE_TOKEN_NAME = "next_page_token"
FIELD_NEXT_PAGE_TOKEN_NUMBER = 10011

FIELD_UPDATE_MASK_NAME = "update_mask"
FIELD_UPDATE_MASK_NUMBER = 10012

FIELD_RESOURCE_NUMBER = 10015

FIELD_RESULTS_NAME = "results"
FIELD_RESULTS_NUMBER = 10016

FIELD_MAX_PAGE_SIZE_NAME = "max_page_size"
FIELD_MAX_PAGE_SIZE_NUMBER = 10017

GLOBAL_LIST_WILDCARD = "--"

FIELD_MASK_TYPE = "google.protobuf.FieldMask"
EMPTY_TYPE = "google.protobuf.Empty"

GOOGLE_API_IMPORTS = (
    "google/api/annotations.proto",
    "google/api/client.proto",
    "google/api/field_behavior.proto",
    "google/api/resource.proto",
)
