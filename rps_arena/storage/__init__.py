"""
存储模块
Storage Module
"""
from .stats_store import StatsStore

__all__ = ['StatsStore']
