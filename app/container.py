# app/container.py
from functools import lru_cache

from app.infra.cache.redis_cache import RedisCache
from app.infra.config.vocabulary_loader import load_vocabulary
from app.infra.repo.kv_catalog import KvCatalog
from app.infra.search.router import ExternalSourceRouter
from app.infra.sources.foodrepo import FoodRepoSource
from app.infra.sources.openfoodfacts import OpenFoodFactsSource
from app.infra.sources.supplement_db import SupplementDbSource

from app.domain.categories import TypeInferrer
from app.domain.vocabulary import SearchVocabulary
from app.application.search_use_case import SearchCatalogUseCase


@lru_cache
def _cache() -> RedisCache: return RedisCache.from_env()

@lru_cache
def _vocabulary() -> SearchVocabulary: return load_vocabulary()

@lru_cache
def _catalog() -> KvCatalog: return KvCatalog(_cache())

@lru_cache
def _sources() -> ExternalSourceRouter:
    types = TypeInferrer(_vocabulary().type_rules)
    # order matters: earlier sources win dedup ties
    return ExternalSourceRouter([
        OpenFoodFactsSource(types=types),
        FoodRepoSource(types=types),
        SupplementDbSource(cache=_cache(), types=types),
    ])

@lru_cache
def _search_uc() -> SearchCatalogUseCase:
    return SearchCatalogUseCase(catalog=_catalog(), sources=_sources(), vocabulary=_vocabulary())


def get_search_use_case() -> SearchCatalogUseCase: return _search_uc()
def get_cache() -> RedisCache: return _cache()
def get_catalog() -> KvCatalog: return _catalog()
def get_sources() -> ExternalSourceRouter: return _sources()
