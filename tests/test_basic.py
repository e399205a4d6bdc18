from richfn import Multiplicity, apply_to, bijection, meet


def test_bijection_smoke() -> None:
    plus5 = bijection(lambda x: x + 5, lambda y: y - 5)
    assert apply_to(plus5, 10) == 15
    assert meet(plus5.to_kind, Multiplicity.OPTIONAL).value == "optional"


if __name__ == "__main__":
    test_bijection_smoke()
    print("Basic test passed!")
