"""Configuration management."""

import json
from pathlib import Path

from pydantic import BaseModel, PositiveFloat, PositiveInt

from .instructions import DirectionScheme


class ViewportConfig(BaseModel):
    width: PositiveFloat = 600.0
    height: PositiveFloat = 400.0


class LanguageConfig(BaseModel):
    directions: DirectionScheme = DirectionScheme.COMPASS
    strict: bool = True  # reject trailing tokens


class RunConfig(BaseModel):
    looping: bool = True
    step_interval_ms: PositiveInt = 50


class Config(BaseModel):
    viewport: ViewportConfig = ViewportConfig()
    language: LanguageConfig = LanguageConfig()
    run: RunConfig = RunConfig()

    @classmethod
    def load(cls, path: str | Path = "configs/turtle.json") -> "Config":
        with open(path, encoding="utf-8") as f:
            return cls.model_validate(json.load(f))

    def save(self, path: str | Path = "configs/turtle.json"):
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.model_dump(mode="json"), f, indent=4)
