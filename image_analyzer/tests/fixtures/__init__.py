"""Shared test fixtures for the Image Analyzer."""
