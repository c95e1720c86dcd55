# -*- coding: utf-8 -*-
"""
Translation dictionaries for English and Portuguese.

This module contains all translatable strings for the planner.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Week Planner",

        # Days (short)
        "day.mon": "Mon",
        "day.tue": "Tue",
        "day.wed": "Wed",
        "day.thu": "Thu",
        "day.fri": "Fri",
        "day.sat": "Sat",
        "day.sun": "Sun",

        # Days (long)
        "day.long.mon": "Monday",
        "day.long.tue": "Tuesday",
        "day.long.wed": "Wednesday",
        "day.long.thu": "Thursday",
        "day.long.fri": "Friday",
        "day.long.sat": "Saturday",
        "day.long.sun": "Sunday",
        "day.long.unknown": "Day",

        # Tags
        "tag.work": "Work",
        "tag.personal": "Personal",

        # Week report
        "report.title": "Week overview",
        "report.window": "Day window: {start}–{end}",
        "report.busy": "busy {busy} ({pct}%)",
        "report.free": "Free slots",
        "report.no_free": "No free time",
        "report.pinned": "Top 3",
        "report.no_tasks": "No tasks yet.",
        "report.unscheduled": "no time",
        "report.goals": "Goals",
        "report.best_slots": "Best free slots",

        # Sync
        "sync.saved": "Synced",
        "sync.failed": "Sync failed, changes kept on this device",
    },
    "pt": {
        # Application
        "app.name": "Ritmo",

        # Days (short)
        "day.mon": "Seg",
        "day.tue": "Ter",
        "day.wed": "Qua",
        "day.thu": "Qui",
        "day.fri": "Sex",
        "day.sat": "Sáb",
        "day.sun": "Dom",

        # Days (long)
        "day.long.mon": "Segunda-feira",
        "day.long.tue": "Terça-feira",
        "day.long.wed": "Quarta-feira",
        "day.long.thu": "Quinta-feira",
        "day.long.fri": "Sexta-feira",
        "day.long.sat": "Sábado",
        "day.long.sun": "Domingo",
        "day.long.unknown": "Dia",

        # Tags
        "tag.work": "Trabalho",
        "tag.personal": "Pessoal",

        # Week report
        "report.title": "Visão da semana",
        "report.window": "Janela do dia: {start}–{end}",
        "report.busy": "ocupado {busy} ({pct}%)",
        "report.free": "Espaços livres",
        "report.no_free": "Sem espaço livre",
        "report.pinned": "Top 3 do dia",
        "report.no_tasks": "Nenhuma tarefa ainda.",
        "report.unscheduled": "sem horário",
        "report.goals": "Objetivos",
        "report.best_slots": "Melhores espaços livres",

        # Sync
        "sync.saved": "Sincronizado",
        "sync.failed": "Falha ao sincronizar, alterações mantidas no dispositivo",
    },
}

DEFAULT_QUOTES = {
    "en": [
        "Slow and steady.",
        "One step at a time.",
        "Consistency wins.",
        "Today is a good day.",
        "Prioritize what matters.",
    ],
    "pt": [
        "Devagar e sempre.",
        "Um passo por vez.",
        "Consistência vence.",
        "Hoje é um bom dia.",
        "Priorize o essencial.",
    ],
}
