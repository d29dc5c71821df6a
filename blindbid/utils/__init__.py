"""Utility helpers: logging, validation, benchmarks"""
