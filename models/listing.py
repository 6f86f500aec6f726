#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Модель объявления о недвижимости (таблица listings, заполняется внешним парсером)
"""

import enum
from typing import Optional, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChangeType(str, enum.Enum):
    """Тип последнего изменения объявления"""

    NEW = "NEW"
    PRICE_DROP = "PRICE_DROP"
    PRICE_UP = "PRICE_UP"


class Listing(BaseModel):
    """Объявление. Здесь только читается, владеет данными внешний процесс"""

    model_config = ConfigDict(extra="ignore")

    listing_id: str = Field(..., description="ID объявления")
    property_type: Optional[str] = Field(None, description="Тип недвижимости")
    square_meters: Optional[float] = Field(None, description="Площадь, м²")
    area: Optional[str] = Field(None, description="Район")
    price: Optional[float] = Field(None, description="Текущая цена")
    price_change: Optional[float] = Field(None, description="Изменение цены (новая - старая)")
    change_type: Optional[str] = Field(None, description="NEW / PRICE_DROP / PRICE_UP / ...")
    first_seen_date: Optional[str] = None
    last_seen_date: Optional[str] = None

    @field_validator("listing_id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> str:
        return str(value)

    def __str__(self) -> str:
        return f"{self.property_type or 'Listing'} {self.area or ''} - {self.price}€"

    @property
    def previous_price(self) -> float:
        """Цена до изменения: текущая минус записанное изменение"""
        return (self.price or 0) - (self.price_change or 0)
