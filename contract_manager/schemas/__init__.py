"""Pydantic schemas shared by services and the event log"""
