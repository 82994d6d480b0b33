from collections import defaultdict

import pygame
import pytest

from leafstage.fighter import (
    ANIMATION_DELAY,
    ATTACK_FRAMES,
    GROUND_Y,
    JUMP_POWER,
    RUN_SPEED,
    SCREEN_WIDTH,
    WALK_FRAMES,
    WALK_SPEED,
    WASD_CONTROLS,
    Controls,
    Fighter,
    create_fighter,
    load_fighter_sprites,
)
from leafstage.player import Action, Direction, PlayerSprites
from leafstage.scoreboard import ScoreInfo


def held(*codes):
    keys = defaultdict(bool)
    for code in codes:
        keys[code] = True
    return keys


def surface(color, size=(10, 20)):
    s = pygame.Surface(size)
    s.fill(color)
    return s


def make_sprites():
    sprites = PlayerSprites({}, {}, {}, {}, {}, {}, {})
    for d in Direction:
        sprites.idle[d] = surface((1, 1, 1))
        sprites.walk[d] = tuple(surface((10 + i, 0, 0)) for i in range(3))
        sprites.run[d] = tuple(surface((0, 10 + i, 0)) for i in range(3))
        sprites.crouch[d] = surface((2, 2, 2))
        sprites.down[d] = tuple(surface((0, 0, 10 + i)) for i in range(2))
        sprites.attack[d] = tuple(surface((50 + i, 50, 50)) for i in range(2))
        sprites.jump[d] = surface((3, 3, 3))
    return sprites


def make_fighter(controls=None, clock_value=0):
    rect = pygame.Rect(100, GROUND_Y - 20, 10, 20)
    kwargs = {"clock": lambda: clock_value}
    if controls is not None:
        kwargs["controls"] = controls
    return Fighter(make_sprites(), rect, **kwargs)


def test_walk_right_earns_point():
    f = make_fighter()
    score = ScoreInfo("ana")
    f.handle_input(held(pygame.K_RIGHT), score)
    assert f.vel_x == WALK_SPEED
    assert f.direction is Direction.RIGHT
    assert f.action is Action.WALK
    assert score.score == 1


def test_run_left():
    f = make_fighter()
    f.handle_input(held(pygame.K_LEFT, pygame.K_LSHIFT), None)
    assert f.vel_x == -RUN_SPEED
    assert f.direction is Direction.LEFT
    assert f.action is Action.RUN


def test_attack_takes_priority_and_uses_clock():
    f = make_fighter(clock_value=777)
    score = ScoreInfo("ana")
    f.handle_input(held(pygame.K_LCTRL, pygame.K_RIGHT), score)
    assert f.action is Action.ATTACK
    assert f.attacking
    assert f.vel_x == 0
    assert f.last_frame_time == 777
    assert score.score == 1


def test_input_ignored_while_attacking():
    f = make_fighter()
    f.attacking = True
    f.action = Action.ATTACK
    score = ScoreInfo("ana")
    f.handle_input(held(pygame.K_RIGHT), score)
    assert f.vel_x == 0
    assert f.action is Action.ATTACK
    assert score.score == 0


def test_jump_sets_upward_velocity():
    f = make_fighter()
    f.handle_input(held(pygame.K_UP), None)
    assert f.vel_y == -JUMP_POWER
    assert f.is_jumping
    assert f.action is Action.JUMP


def test_no_keys_means_idle():
    f = make_fighter()
    f.action = Action.WALK
    f.handle_input(held(), None)
    assert f.action is Action.IDLE


def test_wasd_controls():
    f = make_fighter(controls=WASD_CONTROLS)
    f.handle_input(held(pygame.K_d), None)
    assert f.vel_x == WALK_SPEED
    f.handle_input(held(pygame.K_RIGHT), None)
    assert f.vel_x == 0
    assert f.action is Action.IDLE


def test_custom_controls():
    controls = Controls((pygame.K_1,), (pygame.K_2,), (pygame.K_3,), (pygame.K_4,), (pygame.K_5,), (pygame.K_6,))
    f = make_fighter(controls=controls)
    f.handle_input(held(pygame.K_2), None)
    assert f.action is Action.CROUCH


def test_attack_animation_ends():
    f = make_fighter()
    f.handle_input(held(pygame.K_RCTRL), None)
    now = 0
    for _ in range(ATTACK_FRAMES):
        now += ANIMATION_DELAY + 1
        f.update(now)
    assert not f.attacking
    assert f.action is Action.IDLE
    assert f.frame == 0


def test_walk_frames_loop():
    f = make_fighter()
    f.action = Action.WALK
    seen = []
    now = 0
    for _ in range(WALK_FRAMES * 2):
        now += ANIMATION_DELAY + 1
        f.update(now)
        seen.append(f.frame)
    assert set(seen) == set(range(WALK_FRAMES))


def test_idle_frame_stays_zero():
    f = make_fighter()
    f.update(ANIMATION_DELAY + 1)
    assert f.frame == 0


def test_jump_lands_idle():
    f = make_fighter()
    f.handle_input(held(pygame.K_UP), None)
    for step in range(200):
        f.update(step)
        if f.on_ground and not f.is_jumping:
            break
    assert f.on_ground
    assert f.action is Action.IDLE
    assert f.rect.bottom == GROUND_Y


def test_landing_with_arrow_held_keeps_action():
    f = make_fighter()
    f.handle_input(held(pygame.K_UP), None)
    for step in range(200):
        f.update(step, held(pygame.K_LEFT))
        if not f.is_jumping:
            break
    assert f.action is Action.JUMP
    assert f.rect.bottom == GROUND_Y


def test_right_edge_clamp():
    f = make_fighter()
    f.rect.x = SCREEN_WIDTH
    f.vel_x = WALK_SPEED
    f.update(0)
    assert f.rect.right == SCREEN_WIDTH


def test_ceiling_clamp():
    f = make_fighter()
    f.on_ground = False
    f.rect.y = 5
    f.vel_y = -20
    f.update(0)
    assert f.rect.y == 0
    assert f.vel_y == 0


def test_current_sprite_follows_action():
    f = make_fighter()
    assert f.current_sprite() is f.sprites.idle[Direction.RIGHT]
    f.action = Action.WALK
    f.frame = 2
    assert f.current_sprite() is f.sprites.walk[Direction.RIGHT][2]
    f.action = Action.ATTACK
    f.direction = Direction.LEFT
    f.frame = 1
    assert f.current_sprite() is f.sprites.attack[Direction.LEFT][1]


def test_render_blits_sprite():
    f = make_fighter()
    f.action = Action.CROUCH
    screen = pygame.Surface((SCREEN_WIDTH, GROUND_Y + 10))
    f.render(screen)
    assert screen.get_at(f.rect.topleft)[:3] == (2, 2, 2)


def _write_images(root, folder, names):
    for side in ("droite", "gauche"):
        directory = root / folder / side
        directory.mkdir(parents=True, exist_ok=True)
        for name in names:
            pygame.image.save(surface((5, 5, 5), (8, 16)), str(directory / name))


def test_load_variant_two_names(tmp_path):
    _write_images(tmp_path, "images2", ["immobile.png", "marche1.png", "marche2.png", "marche3.png"])
    sprites = load_fighter_sprites(tmp_path, 2)
    assert all(img is not None for img in sprites.walk[Direction.LEFT])
    assert sprites.run[Direction.RIGHT][0] is None


def test_missing_idle_raises(tmp_path):
    _write_images(tmp_path, "images", ["marcher1.png"])
    with pytest.raises(FileNotFoundError):
        load_fighter_sprites(tmp_path, 1)


def test_unknown_variant_raises(tmp_path):
    with pytest.raises(ValueError):
        load_fighter_sprites(tmp_path, 3)


def test_create_fighter_stands_on_ground(tmp_path):
    _write_images(tmp_path, "images", ["immobile.png"])
    fighter = create_fighter(40, tmp_path, 1)
    assert fighter.rect.bottom == GROUND_Y
    assert fighter.rect.x == 40
    assert fighter.controls.left == (pygame.K_LEFT,)