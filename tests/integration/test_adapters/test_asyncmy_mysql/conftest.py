from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest

from mysqlb import AsyncmyDriver, config_from_env

SEED = """
DROP TABLE IF EXISTS professions;
DROP TABLE IF EXISTS users;
CREATE TABLE users (
    id INT NOT NULL AUTO_INCREMENT,
    f_name VARCHAR(255) NULL DEFAULT NULL,
    l_name VARCHAR(255) NULL DEFAULT NULL,
    age INT NOT NULL,
    PRIMARY KEY (id)
) ENGINE = InnoDB;
INSERT INTO users (f_name, l_name, age) VALUES ('Hohn', 'Snow', 25);
INSERT INTO users (f_name, l_name, age) VALUES ('Peter', 'Jeneson', 23);
INSERT INTO users (f_name, l_name, age) VALUES ('Olivia', 'Clarke', 23);
INSERT INTO users (f_name, l_name, age) VALUES ('Julia', 'Rose', 23);
INSERT INTO users (f_name, l_name, age) VALUES ('Irene', 'Williams', 23);
CREATE TABLE professions (
    id INT NOT NULL AUTO_INCREMENT,
    user_id INT NOT NULL,
    name VARCHAR(255) NULL DEFAULT NULL,
    PRIMARY KEY (id),
    FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE CASCADE,
    UNIQUE (user_id)
) ENGINE = InnoDB;
INSERT INTO professions (user_id, name) VALUES (1, 'engineer');
INSERT INTO professions (user_id, name) VALUES (2, 'builder');
INSERT INTO professions (user_id, name) VALUES (3, 'lawyer');
INSERT INTO professions (user_id, name) VALUES (4, 'teacher');
INSERT INTO professions (user_id, name) VALUES (5, 'cook');
"""


@pytest.fixture
async def driver() -> AsyncGenerator[AsyncmyDriver, None]:
    """Driver connected to a freshly seeded ``users``/``professions`` schema."""
    async with AsyncmyDriver(config_from_env()) as seeded:
        for statement in filter(None, (part.strip() for part in SEED.split(";"))):
            await seeded.execute(statement, ())
        yield seeded
        await seeded.execute("DROP TABLE IF EXISTS professions", ())
        await seeded.execute("DROP TABLE IF EXISTS users", ())
