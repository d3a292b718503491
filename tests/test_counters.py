from workbook.counters import ByteCounter, Values


def test_byte_counter_write():
    c = ByteCounter()
    assert c.write(b"hello") == 5
    assert int(c) == 5
    assert str(c) == "5"


def test_byte_counter_print():
    c = ByteCounter()
    c.write("hello")
    c.count = 0
    name = "Dolly"
    print(f"hello, {name}", end="", file=c)
    assert c.count == len("hello, Dolly")


def test_byte_counter_counts_utf8_bytes():
    c = ByteCounter()
    text = "héllo"
    assert c.write(text) == len(text.encode("utf-8"))
    assert c.count == len(text.encode("utf-8"))


def test_byte_counter_accumulates():
    c = ByteCounter()
    c.write(b"ab")
    c.write(bytearray(b"cde"))
    assert c.count == len(b"abcde")


def test_values_get_and_add():
    m = Values({"lang": ["en"]})
    m.add("item", "1")
    m.add("item", "2")
    assert m.get("lang") == "en"
    assert m.get("q") == ""
    assert m.get("item") == "1"
    assert m["item"] == ["1", "2"]


def test_values_empty():
    m = Values()
    assert m.get("item") == ""
    m.add("item", "3")
    assert m["item"] == ["3"]


def test_values_empty_list_gives_blank():
    m = Values({"k": []})
    assert m.get("k") == ""