"""
Lightweight test data factory
Generates clearly-marked food reviews for the shared Foody server
"""

from typing import List, Optional
from faker import Faker

from foody_api.config import FoodyConfig, get_config
from foody_api.models import FoodDTO


class DataFactory:
    """Food payload generator"""

    # Rejected by the server's minimum length validation
    INVALID_NAME = "N"
    INVALID_DESCRIPTION = "T"

    def __init__(self, config: Optional[FoodyConfig] = None, seed: Optional[int] = None):
        self.config = config or get_config()
        self.fake = Faker()
        if seed is not None:
            self.fake.seed_instance(seed)
        self.created_ids: List[str] = []

    def track_food_id(self, food_id: str):
        """Track created food id"""
        self.created_ids.append(str(food_id))

    def untrack_food_id(self, food_id: str):
        if str(food_id) in self.created_ids:
            self.created_ids.remove(str(food_id))

    def generate_food(self, **overrides) -> FoodDTO:
        """Generate a valid food review"""
        data = {
            "name": f"{self.config.test_data_prefix} {self.fake.word().title()} Food",
            "description": f"Test description: {self.fake.sentence()}",
        }
        data.update(overrides)
        return FoodDTO(**data)

    def generate_invalid_food(self) -> FoodDTO:
        return FoodDTO(name=self.INVALID_NAME, description=self.INVALID_DESCRIPTION)

    def generate_edited_name(self) -> str:
        return f"{self.config.test_data_prefix} Edited {self.fake.word().title()} Food"
