"""Genetic search for product bundles close to a target price"""
