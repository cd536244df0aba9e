from sqlalchemy.orm import declarative_base

# Shared metadata so foreign keys between the Supabase tables resolve
Base = declarative_base()
