"""Tests for the standard-chess registry and its special moves."""

from arbychess.core.engine import RuleEngine
from arbychess.core.enums import PieceRole
from arbychess.core.layout import layout_of
from arbychess.core.options import RuleOptions
from arbychess.core.piece import PieceInstance
from arbychess.core.types import parse_coordinate as sq
from arbychess.core.variant import StandardChess


def _engine(layout: str, **options: bool) -> RuleEngine:
    return RuleEngine(layout=layout, options=RuleOptions(**options))


def _play(engine: RuleEngine, origin: str, destination: str) -> None:
    piece = engine.piece_at(sq(origin))
    assert piece is not None
    engine.perform(piece.player, piece, engine.calculate_valid_moves(piece)[sq(destination)])


def _at(engine: RuleEngine, name: str) -> PieceInstance:
    piece = engine.piece_at(sq(name))
    assert piece is not None
    return piece


class TestRegistry:
    def test_templates(self) -> None:
        templates = StandardChess().templates()
        assert set(templates) == {
            "king",
            "queen",
            "rook",
            "bishop",
            "knight",
            "wpawn",
            "bpawn",
        }
        assert templates["wpawn"].name == templates["bpawn"].name == "pawn"
        assert templates["king"].has_role(PieceRole.ROYAL)
        assert templates["rook"].has_role(PieceRole.CASTLING_PARTNER)
        assert not templates["queen"].has_role(PieceRole.ROYAL)

    def test_rule_counts(self) -> None:
        templates = StandardChess().templates()
        assert len(templates["king"].movements) == 8
        assert len(templates["queen"].movements) == 8
        assert len(templates["rook"].movements) == 4
        assert len(templates["knight"].movements) == 8
        assert len(templates["wpawn"].movements) == 3

    def test_setup_copies_templates(self) -> None:
        engine = RuleEngine()
        rooks = [p for p in engine.pieces_of("white") if p.name == "rook"]
        assert len(rooks) == 2
        assert rooks[0].base is not rooks[1].base
        uids = {r.uid for r in rooks[0].base.movements}
        assert uids.isdisjoint(r.uid for r in rooks[1].base.movements)


class TestCastling:
    def test_both_sides_available(self) -> None:
        engine = _engine("r3k2r/8/8/8/8/8/8/R3K2R")
        king = _at(engine, "e1")
        moves = engine.calculate_valid_moves(king)
        assert set(moves) == {
            sq("d1"),
            sq("f1"),
            sq("d2"),
            sq("e2"),
            sq("f2"),
            sq("g1"),
            sq("c1"),
        }
        kingside = moves[sq("g1")]
        assert kingside.companion is not None
        rook, target = kingside.companion
        assert rook is _at(engine, "h1")
        assert target == sq("f1")

    def test_kingside_moves_both_pieces(self) -> None:
        engine = _engine("r3k2r/8/8/8/8/8/8/R3K2R")
        rook = _at(engine, "h1")
        _play(engine, "e1", "g1")
        assert layout_of(engine) == "r3k2r/8/8/8/8/8/8/R4RK1"
        assert rook.coords == sq("f1")
        assert engine.piece_at(sq("f1")) is rook

    def test_queenside_moves_both_pieces(self) -> None:
        engine = _engine("r3k2r/8/8/8/8/8/8/R3K2R")
        _play(engine, "e1", "c1")
        assert layout_of(engine) == "r3k2r/8/8/8/8/8/8/2KR3R"

    def test_blocked(self) -> None:
        engine = _engine("r3k2r/8/8/8/8/8/8/R3KB1R")
        moves = engine.calculate_valid_moves(_at(engine, "e1"))
        assert sq("g1") not in moves
        assert sq("c1") in moves

    def test_not_through_check(self) -> None:
        engine = _engine("k4r2/8/8/8/8/8/8/R3K2R")
        moves = engine.calculate_valid_moves(_at(engine, "e1"))
        assert sq("g1") not in moves
        assert sq("f1") not in moves
        assert sq("c1") in moves

    def test_through_check_allowed_without_legality(self) -> None:
        engine = _engine("k4r2/8/8/8/8/8/8/R3K2R", check_legality=False)
        assert sq("g1") in engine.calculate_valid_moves(_at(engine, "e1"))

    def test_not_out_of_check(self) -> None:
        engine = _engine("k3r3/8/8/8/8/8/8/R3K2R")
        moves = engine.calculate_valid_moves(_at(engine, "e1"))
        assert sq("g1") not in moves
        assert sq("c1") not in moves

    def test_not_after_partner_moved(self) -> None:
        engine = _engine("3k4/8/8/8/8/8/8/R3K2R")
        _play(engine, "h1", "h2")
        _play(engine, "d8", "c8")
        _play(engine, "h2", "h1")
        _play(engine, "c8", "d8")
        moves = engine.calculate_valid_moves(_at(engine, "e1"))
        assert sq("g1") not in moves
        assert sq("c1") in moves

    def test_not_after_king_moved(self) -> None:
        engine = _engine("3k4/8/8/8/8/8/8/R3K2R")
        _play(engine, "e1", "e2")
        _play(engine, "d8", "c8")
        _play(engine, "e2", "e1")
        _play(engine, "c8", "d8")
        moves = engine.calculate_valid_moves(_at(engine, "e1"))
        assert sq("g1") not in moves
        assert sq("c1") not in moves


class TestEnPassant:
    LAYOUT = "4k3/3p4/8/8/4P3/8/8/4K3"

    def test_available_right_after_double_step(self) -> None:
        engine = _engine(self.LAYOUT)
        _play(engine, "e4", "e5")
        victim = _at(engine, "d7")
        _play(engine, "d7", "d5")
        moves = engine.calculate_valid_moves(_at(engine, "e5"))
        assert set(moves) == {sq("e6"), sq("d6")}
        action = moves[sq("d6")]
        assert action.capture
        assert action.victim is victim

    def test_capture_removes_passed_pawn(self) -> None:
        engine = _engine(self.LAYOUT)
        _play(engine, "e4", "e5")
        victim = _at(engine, "d7")
        _play(engine, "d7", "d5")
        _play(engine, "e5", "d6")
        assert engine.piece_at(sq("d5")) is None
        assert victim not in engine.pieces_of("black")
        assert layout_of(engine) == "4k3/8/3P4/8/8/8/8/4K3"

    def test_not_after_single_steps(self) -> None:
        engine = _engine(self.LAYOUT)
        _play(engine, "e4", "e5")
        _play(engine, "d7", "d6")
        _play(engine, "e1", "f1")
        _play(engine, "d6", "d5")
        assert sq("d6") not in engine.calculate_valid_moves(_at(engine, "e5"))

    def test_expires_after_another_move(self) -> None:
        engine = _engine(self.LAYOUT)
        _play(engine, "e4", "e5")
        _play(engine, "d7", "d5")
        _play(engine, "e1", "f1")
        _play(engine, "e8", "f8")
        assert sq("d6") not in engine.calculate_valid_moves(_at(engine, "e5"))
