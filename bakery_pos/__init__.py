"""Point-of-sale terminal for a single bakery counter."""
