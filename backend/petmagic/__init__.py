"""PetMagic pet-adoption marketplace backend."""
