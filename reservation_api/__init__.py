"""Reservation Management API"""
