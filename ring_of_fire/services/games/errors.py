class GameError(Exception):
    """Base class for game state-machine failures."""


class GameNotFound(GameError):
    def __init__(self, game_id):
        super().__init__(f"No game with id {game_id!r}")
        self.game_id = game_id


class GameAlreadyStarted(GameError):
    def __init__(self, game_id):
        super().__init__(f"Game {game_id} has already started")
        self.game_id = game_id


class DuplicatePlayer(GameError):
    def __init__(self, game_id, username):
        super().__init__(f"{username!r} is already in game {game_id}")
        self.game_id = game_id
        self.username = username


class EmptyDeck(GameError):
    def __init__(self):
        super().__init__("There are no cards left in the deck")
