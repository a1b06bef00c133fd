"""SmartCampus administration service (campus/admin lifecycle on Firebase)."""
