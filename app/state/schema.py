from __future__ import annotations

from sqlalchemy import BigInteger
from sqlalchemy import Boolean
from sqlalchemy import Column
from sqlalchemy import DateTime
from sqlalchemy import Float
from sqlalchemy import ForeignKey
from sqlalchemy import Index
from sqlalchemy import Integer
from sqlalchemy import MetaData
from sqlalchemy import SmallInteger
from sqlalchemy import String
from sqlalchemy import Table
from sqlalchemy import Text

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=False),
    Column("username", Text, nullable=False, unique=True),
    Column("steam_id", Text, nullable=True),
    Column("time_registered", DateTime(timezone=True), nullable=True),
    Column("country", String(8), nullable=False),
    Column("avatar_url", Text, nullable=False),
    Column("last_synced_at", DateTime(timezone=True), nullable=True),
)

maps = Table(
    "maps",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=False),
    Column("mapset_id", BigInteger, nullable=False),
    Column("md5", Text, nullable=False),
    Column("artist", Text, nullable=False),
    Column("title", Text, nullable=False),
    Column("difficulty_name", Text, nullable=False),
    Column("creator_id", BigInteger, nullable=False),
    Column("creator_username", Text, nullable=False),
    Column("ranked_status", SmallInteger, nullable=False),
)

scores = Table(
    "scores",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=False),
    Column("user_id", BigInteger, ForeignKey("users.id"), nullable=False),
    Column("map_id", BigInteger, ForeignKey("maps.id"), nullable=False),
    Column("time", DateTime(timezone=True), nullable=False),
    Column("mode", SmallInteger, nullable=False),
    Column("mods", BigInteger, nullable=False),
    Column("mods_string", Text, nullable=False),
    Column("performance_rating", Float, nullable=False),
    Column("personal_best", Boolean, nullable=False),
    Column("is_donator_score", Boolean, nullable=True),
    Column("total_score", BigInteger, nullable=False),
    Column("accuracy", Float, nullable=False),
    Column("grade", String(8), nullable=False),
    Column("max_combo", BigInteger, nullable=False),
    Column("count_marv", BigInteger, nullable=False),
    Column("count_perf", BigInteger, nullable=False),
    Column("count_great", BigInteger, nullable=False),
    Column("count_good", BigInteger, nullable=False),
    Column("count_okay", BigInteger, nullable=False),
    Column("count_miss", BigInteger, nullable=False),
    Column("scroll_speed", BigInteger, nullable=False),
    Column("ratio", Float, nullable=False),
    Index("ix_scores_user_id_mode", "user_id", "mode"),
)

stats_updates = Table(
    "stats_updates",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", BigInteger, ForeignKey("users.id"), nullable=False),
    Column("recorded_at", DateTime(timezone=True), nullable=False),
    Column("mode", SmallInteger, nullable=False),
    Column("total_score", BigInteger, nullable=False),
    Column("ranked_score", BigInteger, nullable=False),
    Column("overall_accuracy", Float, nullable=False),
    Column("overall_performance_rating", Float, nullable=False),
    Column("play_count", BigInteger, nullable=False),
    Column("fail_count", BigInteger, nullable=False),
    Column("max_combo", BigInteger, nullable=False),
    Column("replays_watched", BigInteger, nullable=False),
    Column("total_marv", BigInteger, nullable=False),
    Column("total_perf", BigInteger, nullable=False),
    Column("total_great", BigInteger, nullable=False),
    Column("total_good", BigInteger, nullable=False),
    Column("total_okay", BigInteger, nullable=False),
    Column("total_miss", BigInteger, nullable=False),
    Column("total_pauses", BigInteger, nullable=False),
    Column("multiplayer_wins", BigInteger, nullable=False),
    Column("multiplayer_losses", BigInteger, nullable=False),
    Column("multiplayer_ties", BigInteger, nullable=False),
    Column("global_rank", BigInteger, nullable=False),
    Column("country_rank", BigInteger, nullable=False),
    Column("multiplayer_win_rank", BigInteger, nullable=False),
    Index("ix_stats_updates_user_id_recorded_at", "user_id", "recorded_at"),
)
