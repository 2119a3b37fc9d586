"""LeadSync - spreadsheet upload pipeline and leads view backed by Supabase."""

__version__ = "0.1.0"
