"""Turn a free-text todo instruction into one structured CRUD intent."""
