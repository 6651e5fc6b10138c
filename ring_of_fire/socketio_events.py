from dataclasses import dataclass
from typing import Any, Dict, Optional

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from ring_of_fire import socketio
from ring_of_fire.services.games import (
    DuplicatePlayer,
    EmptyDeck,
    Game,
    GameAlreadyStarted,
    GameNotFound,
    SessionRegistry,
)


@dataclass(frozen=True)
class Membership:
    game_id: str
    username: str


def _get_sid() -> str:
    return request.sid  # type: ignore


def _text(data: Any, key: str) -> Optional[str]:
    value = data.get(key) if isinstance(data, dict) else None
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class GameGateway:
    """Translates Socket.IO events into game operations.

    The only state kept here is which game and username each connection
    belongs to. Everything else lives in the registry. Turn and host checks
    happen here: a client acting out of turn is dropped without a reply.
    """

    def __init__(self, registry: SessionRegistry, sio=None, namespace: str = '/'):
        self.registry = registry
        self.socketio = sio or socketio
        self.namespace = namespace
        self._sid_to_member: Dict[str, Membership] = {}

    # ---- helpers ----

    def _broadcast(self, game: Game, event: str, payload: Any) -> None:
        self.socketio.emit(event, payload, to=game.game_id, namespace=self.namespace)

    def _membership(self) -> Optional[Membership]:
        return self._sid_to_member.get(_get_sid())

    def _member_game(self, action: str):
        """Resolve the sender's game, or None if the event should be dropped."""
        member = self._membership()
        if member is None:
            current_app.logger.debug(f"[drop] action={action} sid={_get_sid()} reason=no_game")
            return None, None
        try:
            game = self.registry.get(member.game_id)
        except GameNotFound:
            current_app.logger.debug(f"[drop] action={action} game={member.game_id} reason=game_gone")
            return member, None
        return member, game

    def _enter(self, game: Game, username: str) -> None:
        join_room(game.game_id)
        self._sid_to_member[_get_sid()] = Membership(game.game_id, username)

    def _leave(self, sid: str) -> None:
        member = self._sid_to_member.pop(sid, None)
        if member is None:
            return
        leave_room(member.game_id, sid=sid)
        try:
            game = self.registry.get(member.game_id)
        except GameNotFound:
            return
        with game.lock:
            turn_moves = game.started and game.is_current_player(member.username)
            self.registry.remove_player(game.game_id, member.username)
            current_app.logger.info(f"[game-leave] game={game.game_id} user={member.username} remaining={game.players}")
            if game.closed:
                current_app.logger.info(f"[game-closed] game={game.game_id}")
                return
            self._broadcast(game, 'userLeft', {'players': list(game.players), 'host': game.host})
            if turn_moves:
                self._broadcast(game, 'nextRound', game.current_player)

    def _joined_payload(self, game: Game, username: str) -> Dict[str, Any]:
        return {
            'gameName': game.name,
            'username': username,
            'gameID': game.game_id,
            'players': list(game.players),
        }

    # ---- event handlers ----

    def handle_connect(self, auth=None):
        current_app.logger.debug(f"[connect] sid={_get_sid()}")

    def handle_disconnect(self, reason=None):
        current_app.logger.debug(f"[disconnect] sid={_get_sid()} reason={reason}")
        self._leave(_get_sid())

    def handle_leave_game(self, data=None):
        self._leave(_get_sid())

    def handle_create_game(self, data):
        game_name = _text(data, 'gameName')
        host_name = _text(data, 'hostName')
        if not game_name or not host_name:
            emit('error', {'message': 'gameName and hostName are required'})
            return

        self._leave(_get_sid())
        game = self.registry.create(game_name, host_name)
        with game.lock:
            self._enter(game, host_name)
            current_app.logger.info(f"[game-create] game={game.game_id} name={game_name!r} host={host_name}")
            emit('gameJoined', self._joined_payload(game, host_name))

    def handle_join_game(self, data):
        game_id = _text(data, 'gameID')
        username = _text(data, 'username')
        if not game_id or not username:
            emit('error', {'message': 'gameID and username are required'})
            return

        member = self._membership()
        if member is not None and member.game_id == game_id.upper():
            current_app.logger.debug(f"[drop] action=joinGame game={member.game_id} user={username} reason=already_joined")
            return

        try:
            game = self.registry.get(game_id)
            with game.lock:
                game.check_can_join(username)
            # Only one game per connection. The old seat is given up once the
            # new join has been validated; the two locks are never held together.
            self._leave(_get_sid())
            with game.lock:
                game.add_player(username)
                self._enter(game, username)
                self._broadcast(game, 'userJoined', {'players': list(game.players)})
                emit('gameJoined', self._joined_payload(game, username))
        except GameNotFound:
            current_app.logger.info(f"[game-join-invalid] game={game_id} user={username}")
            emit('invalidGame', game_id)
            return
        except GameAlreadyStarted:
            emit('joinRejected', {'gameID': game_id, 'reason': 'gameAlreadyStarted',
                                  'message': 'This game has already started'})
            return
        except DuplicatePlayer:
            emit('joinRejected', {'gameID': game_id, 'reason': 'duplicatePlayer',
                                  'message': f'{username} is already in this game'})
            return
        current_app.logger.info(f"[game-join] game={game.game_id} user={username} players={game.players}")

    def handle_start_game(self, data=None):
        member, game = self._member_game('startGame')
        if game is None:
            return
        with game.lock:
            if not game.is_host(member.username):
                current_app.logger.debug(f"[drop] action=startGame game={game.game_id} user={member.username} reason=not_host")
                return
            first = game.start()
            current_app.logger.info(f"[game-start] game={game.game_id} first={first}")
            self._broadcast(game, 'nextRound', first)

    def handle_next_round(self, data=None):
        member, game = self._member_game('nextRound')
        if game is None:
            return
        with game.lock:
            if not game.is_current_player(member.username):
                current_app.logger.debug(f"[drop] action=nextRound game={game.game_id} user={member.username} reason=not_your_turn")
                return
            self._broadcast(game, 'nextRound', game.advance_turn())

    def handle_get_card(self, data=None):
        member, game = self._member_game('getCard')
        if game is None:
            return
        with game.lock:
            # Prevent someone trying to cheat
            if not game.is_current_player(member.username):
                current_app.logger.debug(f"[drop] action=getCard game={game.game_id} user={member.username} reason=not_your_turn")
                return
            try:
                draw = game.draw_card()
            except EmptyDeck:
                current_app.logger.info(f"[deck-empty] game={game.game_id} picker={member.username}")
                self._broadcast(game, 'deckEmpty', {'picker': member.username})
                return
            current_app.logger.info(f"[card-drawn] game={game.game_id} picker={draw.picker} card={draw.card.code} left={len(game.deck)}")
            self._broadcast(game, 'pickedNextCard', draw.to_dict())

    def register(self) -> None:
        ns = self.namespace
        self.socketio.on_event('connect', self.handle_connect, namespace=ns)
        self.socketio.on_event('disconnect', self.handle_disconnect, namespace=ns)
        self.socketio.on_event('createGame', self.handle_create_game, namespace=ns)
        self.socketio.on_event('joinGame', self.handle_join_game, namespace=ns)
        self.socketio.on_event('leaveGame', self.handle_leave_game, namespace=ns)
        self.socketio.on_event('startGame', self.handle_start_game, namespace=ns)
        self.socketio.on_event('nextRound', self.handle_next_round, namespace=ns)
        self.socketio.on_event('getCard', self.handle_get_card, namespace=ns)


def register_socketio_handlers(registry: SessionRegistry, namespace: str = '/') -> GameGateway:
    """Register Socket.IO event handlers bound to ``registry``."""
    gateway = GameGateway(registry, namespace=namespace)
    gateway.register()
    return gateway
