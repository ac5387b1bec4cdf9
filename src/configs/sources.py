"""
Declared schemas for every spreadsheet the pipeline reads.

Each column entry is {field, aliases, type, required}:
- field: canonical name written to the JSON output
- aliases: header texts that map to the field (first match in the sheet wins)
- type: value parser (count | rate | number | year | string | text | flag | date)
- required: a missing required column aborts the parse

Headers not declared here are ignored, so extra spreadsheet columns are harmless.
Changing what the pipeline reads should be a visible diff in this file.
"""

SOURCES = {
    # ---- Federal AFCARS state totals (one sheet, 52 states x 3 years) ----
    "afcars": {
        "path": "data/raw_data/AFCARS.xlsx",
        "format": "xlsx",
        "output": "data/processed_data/afcars.json",
        "hint": (
            "Export the AFCARS state table to xlsx (one row per state and year) "
            "and place it at data/raw_data/AFCARS.xlsx."
        ),
        "columns": [
            {"field": "state", "aliases": ["State"], "type": "string", "required": True},
            {"field": "year", "aliases": ["Year"], "type": "year", "required": True},
            {"field": "childrenInCare", "aliases": ["Children in Care"], "type": "count", "required": True},
            {"field": "childrenInFosterCare", "aliases": ["Children in Foster Care"], "type": "count", "required": True},
            {"field": "childrenInKinshipCare", "aliases": ["Children in Kinship Care"], "type": "count", "required": True},
            {"field": "childrenWaitingForAdoption", "aliases": ["Children Waiting For Adoption", "Children Waiting for Adoption"], "type": "count", "required": True},
            {"field": "childrenAdopted", "aliases": ["Number of Adoptions"], "type": "count", "required": True},
            {"field": "reunificationRate", "aliases": ["Biological Reunification Rate"], "type": "rate", "required": True},
            {"field": "familyPreservationCases", "aliases": ["Family Preservation Cases"], "type": "count", "required": True},
            {"field": "licensedHomes", "aliases": ["Number of Licensed Homes"], "type": "count", "required": True},
        ],
    },
    # ---- Per-state provenance and metric definitions (keyed by full state name) ----
    "sources": {
        "path": "data/raw_data/Sources_and_Definitions.xlsx",
        "format": "xlsx",
        "output": "data/processed_data/sources.json",
        "hint": (
            "Download Sources_and_Definitions.xlsx from the shared drive "
            "and place it at data/raw_data/Sources_and_Definitions.xlsx."
        ),
        "columns": [
            # the state column has no header in the export
            {"field": "state", "aliases": ["Unnamed: 0", "State"], "type": "string", "required": True},
            {"field": "dataDate", "aliases": ["Date of Data Collection"], "type": "date", "required": True},
            {"field": "sourceAgency", "aliases": ["Source"], "type": "text", "required": True},
            {"field": "sourceUrl", "aliases": ["Source Hyperlink"], "type": "text", "required": False},
        ],
        "definition_columns": [
            {"field": "childrenInCare", "aliases": ["Number of Children in Care"], "type": "text"},
            {"field": "childrenInFosterCare", "aliases": ["Number of Children in Family Foster Care"], "type": "text"},
            {"field": "childrenInKinshipCare", "aliases": ["Number of Children in Kinship Care"], "type": "text"},
            {"field": "childrenPlacedOutOfCounty", "aliases": ["Number of Children Placed Out-of-County"], "type": "text"},
            {"field": "fosterKinshipHomes", "aliases": ["Number of Foster and Kinship Homes"], "type": "text"},
            {"field": "childrenWaitingForAdoption", "aliases": ["Number of Children Waiting for Adoption"], "type": "text"},
            {"field": "reunificationRate", "aliases": ["Biological Family Reunification Rate"], "type": "text"},
            {"field": "familyPreservationCases", "aliases": ["Number of Family Preservation Cases"], "type": "text"},
            {"field": "churches", "aliases": ["Number of Churches"], "type": "text"},
            {"field": "childrenAdopted", "aliases": ["Number of Children Adopted"], "type": "text"},
            {"field": "monthsToAdoption", "aliases": ["Months Elapsed to Adoption"], "type": "text"},
        ],
        "known_typos": {"Pennslyvania": "Pennsylvania"},
    },
    # ---- County / region metrics (one workbook per year, one sheet per state) ----
    "metrics": {
        "paths": {
            2024: "data/raw_data/MTE_Metrics_2024.xlsx",
            2025: "data/raw_data/MTE_Metrics_2025.xlsx",
        },
        "format": "xlsx",
        "output": "data/processed_data/metrics.json",
        "hint": (
            "Export both yearly metrics workbooks (MTE_Metrics_2024.xlsx, "
            "MTE_Metrics_2025.xlsx) into data/raw_data/."
        ),
        # header row may follow up to two title rows
        "header_scan_rows": 3,
        "skip_sheets": [
            "All Data Connect", "Metrics Check", "State Overview", "Top 50%",
            "Sheet75", "Sheet1", "Instructions", "Data Dictionary",
        ],
        "skip_sheet_suffix": " Data",
        "aggregate_rows": ["central office", "total"],
        "columns": [
            {"field": "geography", "aliases": ["County", "Region", "District Office"], "type": "string", "required": True},
            {"field": "population", "aliases": ["County Population", "Region Population"], "type": "count", "required": False},
            {"field": "childrenInCare", "aliases": ["Number of Children in Care"], "type": "count", "required": False},
            {"field": "childrenInFosterCare", "aliases": ["Number of Children in Foster Care"], "type": "count", "required": False},
            {"field": "childrenInKinshipCare", "aliases": ["Number of Children in Kinship Care"], "type": "count", "required": False},
            {"field": "childrenPlacedOutOfCounty", "aliases": ["Number of Children Placed Out-of-County"], "type": "count", "required": False},
            {"field": "fosterKinshipHomes", "aliases": ["Number of Foster and Kinship Homes"], "type": "count", "required": False},
            {"field": "fosterHomes", "aliases": ["Number of Foster Homes"], "type": "count", "required": False},
            {"field": "kinshipHomes", "aliases": ["Number of Kinship Homes"], "type": "count", "required": False},
            {"field": "childrenWaitingForAdoption", "aliases": ["Number of Children Waiting for Adoption"], "type": "count", "required": False},
            {"field": "childrenWith80PlusConnections", "aliases": ["Number of Children with 80+ Connections Made"], "type": "count", "required": False},
            {"field": "reunificationRate", "aliases": ["Biological Family Reunification Rate"], "type": "rate", "required": False},
            {"field": "reunificationRateQ4", "aliases": ["Biological Family Reunification Rate (Oct-Dec)"], "type": "rate", "required": False},
            {"field": "familyPreservationCases", "aliases": ["Number of Family Preservation Cases"], "type": "count", "required": False},
            {"field": "adoptiveFamilies", "aliases": ["Number of Adoptive Families"], "type": "count", "required": False},
            {"field": "biologicalFamilies", "aliases": ["Number of Biological Families"], "type": "count", "required": False},
            {"field": "wraparoundSupporters", "aliases": ["Number of Wraparound Supporters"], "type": "count", "required": False},
            {"field": "churches", "aliases": ["Number of Churches"], "type": "count", "required": False},
            {"field": "fosterRetentionRate", "aliases": ["Foster Family Retention Rate"], "type": "rate", "required": False},
            {"field": "childrenAdopted", "aliases": ["Number Adopted"], "type": "count", "required": False},
            {"field": "monthsToAdoption", "aliases": ["Time Elapsed to Adoption (Months)"], "type": "number", "required": False},
            {"field": "avgBedsPerFamily", "aliases": ["Average Beds per Family"], "type": "number", "required": False},
        ],
    },
    # ---- Organization roster (three sheets joined by organization name) ----
    "organizations": {
        "path": "data/raw_data/MTE_Master_Data.xlsx",
        "format": "xlsx",
        "output": "data/processed_data/orgs-and-networks.json",
        "hint": (
            "Download MTE_Master_Data.xlsx (sheets: Master, Network Members, "
            "Counties Served) and place it at data/raw_data/MTE_Master_Data.xlsx."
        ),
        "sheets": {
            "master": {
                "sheet": "Master",
                "columns": [
                    {"field": "id", "aliases": ["id"], "type": "string", "required": False},
                    {"field": "name", "aliases": ["name"], "type": "string", "required": True},
                    {"field": "isOrganization", "aliases": ["is_organization"], "type": "flag", "required": False},
                    {"field": "isNetwork", "aliases": ["is_network"], "type": "flag", "required": False},
                    {"field": "street", "aliases": ["address"], "type": "string", "required": False},
                    {"field": "city", "aliases": ["city"], "type": "string", "required": False},
                    {"field": "state", "aliases": ["state"], "type": "string", "required": False},
                    {"field": "zip", "aliases": ["zip"], "type": "string", "required": False},
                    {"field": "countyName", "aliases": ["county_name"], "type": "string", "required": False},
                    {"field": "county", "aliases": ["county"], "type": "string", "required": False},
                    {"field": "lat", "aliases": ["latitude"], "type": "number", "required": False},
                    {"field": "lng", "aliases": ["longitude"], "type": "number", "required": False},
                    {"field": "website", "aliases": ["website"], "type": "string", "required": False},
                    {"field": "category", "aliases": ["category"], "type": "string", "required": False},
                    {"field": "activityRecruitFosterKinship", "aliases": ["activity_recruit_foster_kinship"], "type": "flag", "required": False},
                    {"field": "activityRecruitAdoptive", "aliases": ["activity_recruit_adoptive"], "type": "flag", "required": False},
                    {"field": "activityBio", "aliases": ["activity_bio"], "type": "flag", "required": False},
                    {"field": "activitySupport", "aliases": ["activity_support"], "type": "flag", "required": False},
                    {"field": "activityAll", "aliases": ["activity_all"], "type": "flag", "required": False},
                    {"field": "officialFosterMinistry", "aliases": ["official_foster_ministry"], "type": "flag", "required": False},
                    {"field": "contactName", "aliases": ["contact_name"], "type": "string", "required": False},
                    {"field": "contactTitle", "aliases": ["contact_title"], "type": "string", "required": False},
                    {"field": "contactEmail", "aliases": ["contact_email"], "type": "string", "required": False},
                    {"field": "onMap", "aliases": ["on_map"], "type": "flag", "required": False},
                ],
            },
            "network_members": {
                "sheet": "Network Members",
                "columns": [
                    {"field": "orgName", "aliases": ["Organization/Ministry Name"], "type": "string", "required": True},
                    {"field": "network", "aliases": ["Network Name"], "type": "string", "required": True},
                    {"field": "fellowshipCohort", "aliases": ["Fellowship Cohort"], "type": "string", "required": False},
                    {"field": "mouParticipant", "aliases": ["MOU Participant"], "type": "flag", "required": False},
                    {"field": "addedToMap", "aliases": ["Added to Map"], "type": "date", "required": False},
                    {"field": "membershipOnMap", "aliases": ["Network Membership on Map"], "type": "flag", "required": False},
                ],
            },
            "counties_served": {
                "sheet": "Counties Served",
                "columns": [
                    {"field": "orgName", "aliases": ["name"], "type": "string", "required": True},
                    {"field": "county", "aliases": ["county"], "type": "string", "required": True},
                    {"field": "state", "aliases": ["state"], "type": "string", "required": False},
                    {"field": "countyState", "aliases": ["county_state"], "type": "string", "required": False},
                ],
            },
        },
        # activity flag field -> label stored on the organization
        "activities": {
            "activityRecruitFosterKinship": "recruit_foster_kinship",
            "activityRecruitAdoptive": "recruit_adoptive",
            "activityBio": "bio_family",
            "activitySupport": "support",
            "activityAll": "all",
        },
    },
    # ---- County gazetteer (SimpleMaps basic database) ----
    "county_coordinates": {
        "path": "data/raw_data/uscounties.csv",
        "format": "csv",
        "hint": (
            "1. Visit https://simplemaps.com/data/us-counties\n"
            "2. Click \"Download Free Basic Database\"\n"
            "3. Extract the ZIP file\n"
            "4. Place uscounties.csv at data/raw_data/uscounties.csv\n"
            "5. Run this script again"
        ),
        "columns": [
            {"field": "county", "aliases": ["county", "county_name", "name"], "type": "string", "required": True},
            {"field": "stateId", "aliases": ["state_id"], "type": "string", "required": False},
            {"field": "stateName", "aliases": ["state_name", "state"], "type": "string", "required": False},
            {"field": "lat", "aliases": ["lat"], "type": "number", "required": True},
            {"field": "lng", "aliases": ["lng"], "type": "number", "required": True},
            {"field": "population", "aliases": ["population"], "type": "count", "required": False},
        ],
    },
}

PROCESSED_DIR = "data/processed_data"

# Intermediate files the merge and audit stages read from one data directory
PARSED_FILES = {
    "afcars": "afcars.json",
    "sources": "sources.json",
    "metrics": "metrics.json",
    "organizations": "orgs-and-networks.json",
}

DESCRIPTIONS_FILE = "org-descriptions.json"
MERGED_FILE = "real-data.json"
AUDIT_REPORT_FILE = "audit-report.json"
