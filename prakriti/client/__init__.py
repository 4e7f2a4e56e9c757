"""Respondent-side survey client: HTTP access and the survey flow."""

from prakriti.client.api import SurveyApiClient
from prakriti.client.flow import FlowState, SurveyFlow

__all__ = ["SurveyApiClient", "FlowState", "SurveyFlow"]
