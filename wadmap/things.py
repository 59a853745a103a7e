"""
Thing type catalog: DoomEd number -> display name.

Inert lookup data. Entries marked Doom 2 only exist in the commercial
sequel's IWAD.
"""

from typing import Optional


THING_TYPES: dict[int, str] = {
    1: "Player 1 Start",
    2: "Player 2 Start",
    3: "Player 3 Start",
    4: "Player 4 Start",
    5: "Blue Card",
    6: "Yellow Card",
    7: "Spider Mastermind",
    8: "Backpack",
    9: "Shotgun Guy",
    10: "Gibbed Marine",
    11: "Deathmatch Start",
    12: "Gibbed Marine Extra",
    13: "Red Card",
    15: "Dead Marine",
    16: "Cyberdemon",
    17: "Cell Pack",
    18: "Dead Zombie Man",
    19: "Dead Shotgun Guy",
    20: "Dead Doom Imp",
    21: "Dead Demon",
    22: "Dead Cacodemon",
    23: "Dead Lost Soul",
    24: "Gibs",
    25: "Dead Stick",
    26: "Live Stick",
    27: "Head On A Stick",
    28: "Heads On A Stick",
    29: "Head Candles",
    30: "Tall Green Column",
    31: "Short Green Column",
    32: "Tall Red Column",
    33: "Short Red Column",
    34: "Candlestick",
    35: "Candelabra",
    36: "Heart Column",
    37: "Skull Column",
    38: "Red Skull",
    39: "Yellow Skull",
    40: "Blue Skull",
    41: "Evil Eye",
    42: "Floating Skull",
    43: "Torch Tree",
    44: "Blue Torch",
    45: "Green Torch",
    46: "Red Torch",
    47: "Stalagtite",
    48: "Tech Pillar",
    49: "Bloody Twitch",
    50: "Meat 2",
    51: "Meat 3",
    52: "Meat 4",
    53: "Meat 5",
    54: "Big Tree",
    55: "Short Blue Torch",
    56: "Short Green Torch",
    57: "Short Red Torch",
    58: "Spectre",
    59: "Nonsolid Meat 2",
    60: "Nonsolid Meat 4",
    61: "Nonsolid Meat 3",
    62: "Nonsolid Meat 5",
    63: "Nonsolid Twitch",
    64: "Archvile",  # Doom 2
    65: "Chaingun Guy",  # Doom 2
    66: "Revenant",  # Doom 2
    67: "Fatso",  # Doom 2
    68: "Arachnotron",  # Doom 2
    69: "Hell Knight",  # Doom 2
    70: "Burning Barrel",  # Doom 2
    71: "Pain Elemental",  # Doom 2
    72: "Commander Keen",  # Doom 2
    73: "Hang No Guts",  # Doom 2
    74: "Hang B No Brain",  # Doom 2
    75: "Hang T Looking Down",  # Doom 2
    76: "Hang T Skull",  # Doom 2
    77: "Hang T Looking Up",  # Doom 2
    78: "Hang T No Brain",  # Doom 2
    79: "Colon Gibs",  # Doom 2
    80: "Small Blood Pool",  # Doom 2
    81: "Brain Stem",  # Doom 2
    82: "Super Shotgun",  # Doom 2
    83: "Megasphere",  # Doom 2
    84: "Wolfenstein SS",  # Doom 2
    85: "Tech Lamp",  # Doom 2
    86: "Tech Lamp 2",  # Doom 2
    87: "Boss Target",  # Doom 2
    88: "Boss Brain",  # Doom 2
    89: "Boss Eye",  # Doom 2
    118: "Z Bridge",
    2001: "Shotgun",
    2002: "Chaingun",
    2003: "Rocket Launcher",
    2004: "Plasma Rifle",
    2005: "Chainsaw",
    2006: "BFG 9000",
    2007: "Clip",
    2008: "Shell",
    2010: "Rocket Ammo",
    2011: "Stim Pack",
    2012: "Medi Kit",
    2013: "Soul Sphere",
    2014: "Health Bonus",
    2015: "Armor Bonus",
    2018: "Green Armor",
    2019: "Blue Armor",
    2022: "Invulnerability Sphere",
    2023: "Berserk",
    2024: "Blur Sphere",
    2025: "Rad Suit",
    2026: "All Map",
    2028: "Column",
    2035: "Explosive Barrel",
    2045: "Infrared",
    2046: "Rocket Box",
    2047: "Cell",
    2048: "Clip Box",
    2049: "Shell Box",
    3001: "Doom Imp",
    3002: "Demon",
    3003: "Baron Of Hell",
    3004: "Zombie Man",
    3005: "Cacodemon",
    3006: "Lost Soul",
    5010: "Pistol",
    5050: "Stalagmite",
    9050: "Stealth Arachnotron",  # Doom 2
    9051: "Stealth Archvile",  # Doom 2
    9052: "Stealth Baron",
    9053: "Stealth Cacodemon",
    9054: "Stealth Chaingun Guy",  # Doom 2
    9055: "Stealth Demon",
    9056: "Stealth Hell Knight",  # Doom 2
    9057: "Stealth Doom Imp",
    9058: "Stealth Fatso",  # Doom 2
    9059: "Stealth Revenant",  # Doom 2
    9060: "Stealth Shotgun Guy",
    9061: "Stealth Zombie Man",
    9100: "Scripted Marine",
    9101: "Marine Fist",
    9102: "Marine Berserk",
    9103: "Marine Chainsaw",
    9104: "Marine Pistol",
    9105: "Marine Shotgun",
    9106: "Marine SSG",
    9107: "Marine Chaingun",
    9108: "Marine Rocket",
    9109: "Marine Plasma",
    9110: "Marine Railgun",
    9111: "Marine BFG",
}

PLAYER_STARTS = (1, 2, 3, 4)
DEATHMATCH_START = 11


def thing_name(type_code: int) -> Optional[str]:
    """Return the display name for *type_code*, or None if it is not catalogued."""
    return THING_TYPES.get(type_code)
