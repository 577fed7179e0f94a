# secretariat

An in-memory store of student records: students, subjects and enrollments.
It loads them from a sectioned text file. You query and change them with a
small SQL-like language. You can also encrypt the student table with a simple
four-block cipher.

## Installing

```
pip install .
```

## The database file

The file has three sections. Each section starts with a header line that
begins with `[`. The second character of the header picks the table: `S` for
students, `M` for subjects and `I` for enrollments.

```
[STUDENTI]
1, Ana Pop, 2, b
2, Ion Ionescu, 1, t
[MATERII]
1, Programare, Prof Popescu
[INROLARI]
1 1 2.50 3.00 4.00
2 1 1.00 2.00 3.00
```

- Students are `id, name, year, status`. Status is `b` for a funded place or `t` for a fee-paying one. Names are cut to 39 bytes.
- Subjects are `id, name, holder`.
- Enrollments are `student_id subject_id grade grade grade`, separated by spaces.

Blank lines are skipped. A record with too few fields raises `ValueError`.
The loader computes each student's general average from that student's
enrollments.

## Running queries

Pass the database file on the command line. Standard input holds a count
followed by one query per line:

```
secretariat database.txt < queries.txt
```

The queries look like this:

```
3
SELECT * FROM studenti;
SELECT id, nume FROM studenti WHERE an_studiu >= 2;
UPDATE inrolari SET note = 9.00 8.00 7.00 WHERE id_student = 1;
```

The tables are `studenti`, `materii` and `inrolari`. Their columns are:

- `studenti`: `id`, `nume`, `an_studiu`, `statut`, `medie_generala`
- `materii`: `id`, `nume`, `nume_titular`
- `inrolari`: `id_student`, `id_materie`, `note`

Supported forms:

- `SELECT`, with or without `WHERE`. `*` selects every column. Each result row is printed on its own line.
- `DELETE ... WHERE ...`. Deleting an enrollment updates the general average of the student it belongs to.
- `UPDATE ... SET column = value WHERE ...`. New names must be in double quotes. `note` takes three grades. Setting grades recomputes the student's average.
- Conditions are either one comparison or two comparisons joined by `AND`.
- Comparison operators are `=`, `!=`, `<`, `<=`, `>` and `>=`.
- On subjects, only `id` can be compared.

The command exits with status 1 and a message on standard error in three cases:

- the database cannot be read;
- the input does not start with a count;
- a query is malformed, for example a `DELETE` without `WHERE`.

## Using it as a library

```python
from secretariat.models import read_secretariat
from secretariat.queries import select
from secretariat.cli import execute, run
from secretariat.cipher import encrypt_students

db = read_secretariat("database.txt")
print(select(db, "SELECT nume FROM studenti WHERE statut = b;"))
execute(db, "DELETE FROM inrolari WHERE id_materie = 1;")
encrypt_students(db, b"secret", b"token", "students.enc")
```

The modules and their main names:

- `secretariat.models`
  - `Student`, `Subject`, `Enrollment` and `Secretariat` are the records.
  - `parse_secretariat` reads a database from a string. `read_secretariat` reads it from a file.
  - `Secretariat.add_student` appends a student.
  - `Secretariat.average_for` and `Secretariat.recompute_average` compute general averages.
  - `Student.pack` returns the 53-byte binary record of a student.
- `secretariat.conditions`
  - `parse_conditions` reads a `WHERE` clause.
  - `Condition` matches a clause against records.
- `secretariat.queries`
  - `select` returns the output lines of a query.
  - `format_student`, `format_subject` and `format_enrollment` render single rows.
- `secretariat.deletions`: `delete` returns the number of rows removed.
- `secretariat.updates`
  - `update` returns the number of rows matched.
  - `parse_assignment` reads the `SET` clause.
- `secretariat.cipher`
  - `encrypt_bytes` encrypts raw bytes.
  - `encrypt_students` encrypts the packed student table and writes it to a file.
- `secretariat.cli`
  - `execute` runs one query line.
  - `run` yields the output of many query lines.
  - `main` is the command.

## What it does not do

- Changes live only in memory. Nothing writes the database back to its file.
- The query language has no statement for inserting rows. Use `Secretariat.add_student` from Python to add a student.
- The cipher only encrypts. There is no decryption function.