from .base import Base

from .pet import Pet, PetGender
