"""
Keyword tables for the timeline lexer.

LOG_LINE_TYPES are the network log line types of the overlay. Each one is
also a keyword that opens a structured sync on a timeline entry:

    10.0 "Boss Cast" Ability { id: "1234", source: "Boss" }
"""

DEFAULT_KEYWORDS = (
    "sync",
    "window",
    "jump",
    "duration",
    "hideall",
    "alertall",
    "before",
    "sound",
    "define",
    "infotext",
    "alerttext",
    "alarmtext",
)

LOG_LINE_TYPES = (
    "GameLog",
    "ChangeZone",
    "ChangedPlayer",
    "AddedCombatant",
    "RemovedCombatant",
    "PartyList",
    "PlayerStats",
    "StartsUsing",
    "Ability",
    "NetworkAOEAbility",
    "NetworkCancelAbility",
    "NetworkDoT",
    "WasDefeated",
    "GainsEffect",
    "HeadMarker",
    "NetworkRaidMarker",
    "NetworkTargetMarker",
    "LosesEffect",
    "NetworkGauge",
    "NetworkWorld",
    "ActorControl",
    "NameToggle",
    "Tether",
    "LimitBreak",
    "NetworkEffectResult",
    "StatusEffect",
    "NetworkUpdateHP",
    "Map",
    "SystemLogMessage",
    "StatusList3",
    "ParserInfo",
    "ProcessInfo",
    "Debug",
    "PacketDump",
    "Version",
    "Error",
    "None",
    "LineRegistration",
    "MapEffect",
    "FateDirector",
    "CEDirector",
    "InCombat",
    "CombatantMemory",
    "RSVData",
    "StartsUsingExtra",
    "AbilityExtra",
    "ContentFinderSettings",
)
