"""Touchpoint analytics: conversion funnel and contact journey service."""

__version__ = "1.0.0"
