"""Halaqah Tracker package.

Attendance and memorisation-progress bookkeeping for Quran halaqah groups,
organised by feature modules (roster, groups, attendance, progress, reports,
export) with a thin Flask controller layer over plain services and a
pluggable record store.
"""
