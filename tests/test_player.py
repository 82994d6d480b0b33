from collections import defaultdict

import pygame
import pytest

from leafstage.player import (
    ATTACK_FRAMES,
    GROUND_Y,
    JUMP_POWER,
    PLAYER_WALK_SPEED,
    WALK_FRAMES,
    Action,
    Direction,
    Player,
    PlayerSprites,
    create_player,
    load_image,
    load_sprites,
    render_text,
)

RED = (255, 0, 0, 255)


def _surface(color=(10, 20, 30), size=(40, 60)):
    s = pygame.Surface(size)
    s.fill(color)
    return s


def _sprites():
    both = (Direction.RIGHT, Direction.LEFT)
    return PlayerSprites(
        idle={d: _surface() for d in both},
        walk={d: tuple(_surface() for _ in range(3)) for d in both},
        run={d: tuple(_surface() for _ in range(3)) for d in both},
        crouch={d: _surface() for d in both},
        down={d: tuple(_surface() for _ in range(2)) for d in both},
        attack={d: tuple(_surface() for _ in range(2)) for d in both},
        jump={d: _surface() for d in both},
    )


def _player():
    return Player(_sprites(), pygame.Rect(100, GROUND_Y - 60, 40, 60))


def _keys(*pressed):
    return defaultdict(bool, {k: True for k in pressed})


def _write(path, size=(40, 60)):
    path.parent.mkdir(parents=True, exist_ok=True)
    pygame.image.save(_surface(size=size), str(path))


def test_load_image_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_image(tmp_path / "nope.png")


def test_create_player_stands_on_ground(tmp_path):
    for folder in ("droite", "gauche"):
        _write(tmp_path / "player" / "images" / folder / "immobile.png")
    _write(tmp_path / "player" / "images" / "droite" / "jump.png", (30, 30))
    player = create_player(100, tmp_path)
    assert player.rect.x == 100
    assert player.rect.size == (40, 60)
    assert player.rect.bottom == GROUND_Y
    assert player.sprites.walk[Direction.RIGHT][0] is None
    assert player.sprites.jump[Direction.RIGHT].get_size() == (30, 30)


def test_load_sprites_requires_both_idle(tmp_path):
    _write(tmp_path / "player" / "images" / "droite" / "immobile.png")
    with pytest.raises(FileNotFoundError):
        load_sprites(tmp_path)


def test_walk_left():
    p = _player()
    p.handle_input(_keys(pygame.K_LEFT))
    assert p.vel_x == -PLAYER_WALK_SPEED
    assert p.direction is Direction.LEFT
    assert p.action is Action.WALK


def test_run_right_with_shift():
    p = _player()
    p.handle_input(_keys(pygame.K_RIGHT, pygame.K_LSHIFT))
    assert p.vel_x == 2 * PLAYER_WALK_SPEED
    assert p.action is Action.RUN


def test_crouch():
    p = _player()
    p.handle_input(_keys(pygame.K_DOWN))
    assert p.action is Action.CROUCH
    assert p.vel_x == 0


def test_jump_only_from_ground():
    p = _player()
    p.handle_input(_keys(pygame.K_SPACE))
    assert p.vel_y == -JUMP_POWER
    assert not p.on_ground and p.is_jumping
    assert p.action is Action.JUMP
    p.vel_y = -3
    p.handle_input(_keys(pygame.K_SPACE))
    assert p.vel_y == -3


def test_attack_key():
    p = _player()
    p.handle_input(_keys(pygame.K_a))
    assert p.action is Action.ATTACK
    assert p.attacking


def test_idle_when_nothing_held_on_ground_only():
    p = _player()
    p.action = Action.WALK
    p.handle_input(_keys())
    assert p.action is Action.IDLE
    p.action = Action.JUMP
    p.on_ground = False
    p.handle_input(_keys())
    assert p.action is Action.JUMP


def test_jump_arc_lands_on_ground():
    p = _player()
    start = p.rect.y
    p.handle_input(_keys(pygame.K_SPACE))
    highest = start
    for _ in range(200):
        p.update(0)
        highest = min(highest, p.rect.y)
        if p.on_ground:
            break
    assert p.on_ground and not p.is_jumping
    assert p.rect.y == start
    assert p.vel_y == 0
    assert highest < start


def test_horizontal_movement_applies_velocity():
    p = _player()
    p.handle_input(_keys(pygame.K_RIGHT))
    p.update(0)
    assert p.rect.x == 100 + PLAYER_WALK_SPEED


def test_animation_frame_advances_after_delay_and_wraps():
    p = _player()
    p.update(50)
    assert p.frame == 0
    now = 0
    for _ in range(WALK_FRAMES):
        now += 101
        p.update(now)
    assert p.frame == 0
    assert p.last_frame_time == now
    p.update(now + 101)
    assert p.frame == 1


def test_current_sprite_by_action():
    p = _player()
    assert p.current_sprite() is p.sprites.idle[Direction.RIGHT]
    p.action, p.direction, p.frame = Action.WALK, Direction.LEFT, 2
    assert p.current_sprite() is p.sprites.walk[Direction.LEFT][2]
    p.action = Action.ATTACK
    assert p.current_sprite() is p.sprites.attack[Direction.LEFT][2 % ATTACK_FRAMES]
    p.action = Action.JUMP
    assert p.current_sprite() is p.sprites.jump[Direction.LEFT]


def test_render_blits_sprite_at_position():
    p = _player()
    p.sprites.idle[Direction.RIGHT] = _surface(RED[:3])
    screen = pygame.Surface((1800, 875))
    p.render(screen)
    assert tuple(screen.get_at(p.rect.topleft)) == RED
    assert tuple(screen.get_at((0, 0))) == (0, 0, 0, 255)


def test_render_skips_missing_sprite():
    p = _player()
    p.sprites.crouch[Direction.RIGHT] = None
    p.action = Action.CROUCH
    screen = pygame.Surface((1800, 875))
    p.render(screen)
    assert tuple(screen.get_at(p.rect.topleft)) == (0, 0, 0, 255)


def test_render_text_draws_at_position():
    pygame.font.init()
    font = pygame.font.Font(None, 30)
    screen = pygame.Surface((300, 100))
    area = render_text(screen, "Temps", font, 20, 10)
    assert area.topleft == (20, 10)
    pixels = [screen.get_at((x, y)) for x in range(area.left, area.right) for y in range(area.top, area.bottom)]
    assert any(px.r > 200 and px.g > 200 and px.b > 200 for px in pixels)
    assert tuple(screen.get_at((0, 0))) == (0, 0, 0, 255)