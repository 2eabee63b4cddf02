"""Multi-tenant todo API with organization-scoped, role-based permissions."""
