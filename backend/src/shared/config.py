"""
Configuration module for Lambda handlers.
Loads all environment variables needed by the platform.
"""
import os


class Config:
    """Centralized configuration from environment variables."""

    # AWS Region
    AWS_REGION = os.environ.get('AWS_REGION', 'us-east-1')

    # DynamoDB Tables
    TASKS_TABLE = os.environ.get('TASKS_TABLE', '')
    RATINGS_TABLE = os.environ.get('RATINGS_TABLE', '')
    PROFILES_TABLE = os.environ.get('PROFILES_TABLE', '')

    # Task table indexes
    CREATOR_INDEX = os.environ.get('CREATOR_INDEX', 'CreatorIndex')
    DOER_INDEX = os.environ.get('DOER_INDEX', 'DoerIndex')
    STATUS_INDEX = os.environ.get('STATUS_INDEX', 'StatusIndex')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()


config = Config()
