"""Address, description and interface-id helpers"""
