"""MakeCode icon names and their MicroPython Image constants."""

ICON_MAP: dict[str, str] = {
    "Heart": "HEART",
    "SmallHeart": "HEART_SMALL",
    "Yes": "YES",
    "No": "NO",
    "Happy": "HAPPY",
    "Sad": "SAD",
    "Confused": "CONFUSED",
    "Angry": "ANGRY",
    "Asleep": "ASLEEP",
    "Surprised": "SURPRISED",
    "Silly": "SILLY",
    "Fabulous": "FABULOUS",
    "Meh": "MEH",
    "TShirt": "TSHIRT",
    "Rollerskate": "ROLLERSKATE",
    "Duck": "DUCK",
    "House": "HOUSE",
    "Tortoise": "TORTOISE",
    "Butterfly": "BUTTERFLY",
    "StickFigure": "STICK_FIGURE",
    "Ghost": "GHOST",
    "Sword": "SWORD",
    "Giraffe": "GIRAFFE",
    "Skull": "SKULL",
    "Umbrella": "UMBRELLA",
    "Snake": "SNAKE",
    "Rabbit": "RABBIT",
    "Cow": "COW",
    "QuarterNote": "QUARTER_NOTE",
    # MakeCode ships the misspelled name too
    "EigthNote": "EIGHTH_NOTE",
    "EighthNote": "EIGHTH_NOTE",
    "Pitchfork": "PITCHFORK",
    "Tent": "TENT",
    "Jagged": "JAGGED",
    "Target": "TARGET",
    "Triangle": "TRIANGLE",
    "LeftTriangle": "TRIANGLE_LEFT",
    "Chessboard": "CHESSBOARD",
    "Diamond": "DIAMOND",
    "SmallDiamond": "DIAMOND_SMALL",
    "Square": "SQUARE",
    "SmallSquare": "SQUARE_SMALL",
    "Scissors": "SCISSORS",
    "ArrowNorth": "ARROW_N",
    "ArrowNorthEast": "ARROW_NE",
    "ArrowEast": "ARROW_E",
    "ArrowSouthEast": "ARROW_SE",
    "ArrowSouth": "ARROW_S",
    "ArrowSouthWest": "ARROW_SW",
    "ArrowWest": "ARROW_W",
    "ArrowNorthWest": "ARROW_NW",
    "MusicNote": "MUSIC_NOTE",
    "MusicNoteBeamed": "MUSIC_NOTE_BEAMED",
    "MusicalScore": "MUSICAL_SCORE",
    "Xmas": "XMAS",
    "Pacman": "PACMAN",
}


def image_constant(icon_name: str) -> str:
    """Map a MakeCode icon name to an Image constant, uppercasing unknown names."""
    return ICON_MAP.get(icon_name, icon_name.upper())
