"""Firestore collection names (schema-in-code).

Firestore has no DDL; collections appear when the first document is
written. These constants are the single source of truth for names shared
with the mobile client.
"""

COLLECTION_CAMPUSES = "Campuses"
COLLECTION_ADMIN_PROFILES = "Admin_Profiles"

# Subcollection of each campus document
SUBCOLLECTION_BUILDINGS = "Buildings"
# Written at registration so the Buildings subcollection exists from the start
PLACEHOLDER_DOC_ID = "_placeholder"
