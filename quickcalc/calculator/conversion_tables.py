#!/usr/bin/env python3
"""
Unit conversion factor tables for the QuickCalc calculators.

Hub-and-spoke model where each dimension normalizes to a base unit:
weight → kilograms, length → meters, time → seconds. Each factor is the
size of one unit expressed in the base unit.

No external libraries required — pure Python dicts.
"""

from quickcalc.calculator.calc_types import Dimension, WeightUnit, LengthUnit, TimeUnit

# ─────────────────────────────────────────────────────────────────────
# Weight: base unit = kilograms
# ─────────────────────────────────────────────────────────────────────
WEIGHT = {
    "kg" : 1.0,
    "g"  : 0.001,
    "lb" : 0.45359237,
    "oz" : 0.0283495231,
    "st" : 6.35029318,
}

# ─────────────────────────────────────────────────────────────────────
# Length: base unit = meters
# A mile is 1609.34 m here, not the exact 1609.344, to stay compatible
# with previously recorded results.
# ─────────────────────────────────────────────────────────────────────
LENGTH = {
    "m"  : 1.0,
    "cm" : 0.01,
    "mm" : 0.001,
    "km" : 1000.0,
    "in" : 0.0254,
    "ft" : 0.3048,
    "yd" : 0.9144,
    "mi" : 1609.34,
}

# ─────────────────────────────────────────────────────────────────────
# Time: base unit = seconds
# Months and years are fixed approximations: 30-day month, 365-day year.
# ─────────────────────────────────────────────────────────────────────
SECONDS_PER_DAY = 24 * 60 * 60

TIME = {
    "seconds" : 1.0,
    "minutes" : 60.0,
    "hours"   : 60.0 * 60,
    "days"    : float( SECONDS_PER_DAY ),
    "weeks"   : 7.0 * SECONDS_PER_DAY,
    "months"  : 30.0 * SECONDS_PER_DAY,
    "years"   : 365.0 * SECONDS_PER_DAY,
}

# ─────────────────────────────────────────────────────────────────────
# Dimension registry: dimension → (factor table, unit enum, base unit)
# Tables are keyed by plain unit strings; the enums validate names
# ─────────────────────────────────────────────────────────────────────
DIMENSIONS = {
    Dimension.WEIGHT : ( WEIGHT, WeightUnit, WeightUnit.KG ),
    Dimension.LENGTH : ( LENGTH, LengthUnit, LengthUnit.M ),
    Dimension.TIME   : ( TIME,   TimeUnit,   TimeUnit.SECONDS ),
}

# ─────────────────────────────────────────────────────────────────────
# Alias map: spoken/plural/variant forms → canonical unit name
# ─────────────────────────────────────────────────────────────────────
ALIASES = {
    # Weight
    "kilogram"    : "kg",
    "kilograms"   : "kg",
    "kgs"         : "kg",
    "gram"        : "g",
    "grams"       : "g",
    "pound"       : "lb",
    "pounds"      : "lb",
    "lbs"         : "lb",
    "ounce"       : "oz",
    "ounces"      : "oz",
    "stone"       : "st",
    "stones"      : "st",

    # Length
    "meter"       : "m",
    "meters"      : "m",
    "metre"       : "m",
    "metres"      : "m",
    "centimeter"  : "cm",
    "centimeters" : "cm",
    "centimetre"  : "cm",
    "centimetres" : "cm",
    "millimeter"  : "mm",
    "millimeters" : "mm",
    "millimetre"  : "mm",
    "millimetres" : "mm",
    "kilometer"   : "km",
    "kilometers"  : "km",
    "kilometre"   : "km",
    "kilometres"  : "km",
    "inch"        : "in",
    "inches"      : "in",
    "foot"        : "ft",
    "feet"        : "ft",
    "yard"        : "yd",
    "yards"       : "yd",
    "yds"         : "yd",
    "mile"        : "mi",
    "miles"       : "mi",

    # Time
    "s"           : "seconds",
    "sec"         : "seconds",
    "secs"        : "seconds",
    "second"      : "seconds",
    "min"         : "minutes",
    "mins"        : "minutes",
    "minute"      : "minutes",
    "h"           : "hours",
    "hr"          : "hours",
    "hrs"         : "hours",
    "hour"        : "hours",
    "d"           : "days",
    "day"         : "days",
    "w"           : "weeks",
    "wk"          : "weeks",
    "wks"         : "weeks",
    "week"        : "weeks",
    "mo"          : "months",
    "month"       : "months",
    "y"           : "years",
    "yr"          : "years",
    "yrs"         : "years",
    "year"        : "years",
}


def resolve_alias( unit_name ):
    """
    Resolve a unit name to its canonical form.

    Requires:
        - unit_name is a non-empty string or a unit enum member

    Ensures:
        - Returns canonical unit name if alias found
        - Returns original lowered/stripped name if no alias exists
    """
    normalized = str( getattr( unit_name, "value", unit_name ) ).strip().lower()
    return ALIASES.get( normalized, normalized )


def find_dimension( canonical_unit ):
    """
    Find which dimension a canonical unit belongs to.

    Requires:
        - canonical_unit is a string (should be canonical after resolve_alias)

    Ensures:
        - Returns ( factor_table, dimension ) tuple if found
        - Returns ( None, None ) if unit not found in any dimension
    """
    for dimension, ( table, _, _ ) in DIMENSIONS.items():
        if canonical_unit in table:
            return table, dimension

    return None, None


def units_for( dimension ):
    """
    List the units of a dimension in table order.

    Requires:
        - dimension is a Dimension member

    Ensures:
        - Returns the unit enum members of that dimension, base unit first
    """
    table, unit_enum, _ = DIMENSIONS[ Dimension( dimension ) ]
    return [ unit_enum( unit ) for unit in table ]


def quick_smoke_test():
    """Module-level smoke test following QuickCalc convention."""

    print( "Testing conversion_tables module..." )
    passed = True

    try:
        assert resolve_alias( "kilograms" ) == "kg"
        assert resolve_alias( "Miles" ) == "mi"
        assert resolve_alias( "hrs" ) == "hours"
        assert resolve_alias( WeightUnit.OZ ) == "oz"
        print( "  ✓ Alias resolution" )

        table, dimension = find_dimension( "km" )
        assert dimension == Dimension.LENGTH
        assert table is LENGTH
        print( "  ✓ Dimension lookup: km → length" )

        table, dimension = find_dimension( "st" )
        assert dimension == Dimension.WEIGHT
        print( "  ✓ Dimension lookup: st → weight" )

        table, dimension = find_dimension( "months" )
        assert dimension == Dimension.TIME
        assert table[ "months" ] == 30 * SECONDS_PER_DAY
        print( "  ✓ Dimension lookup: months → time (30-day month)" )

        table, dimension = find_dimension( "furlong" )
        assert table is None and dimension is None
        print( "  ✓ Dimension lookup: unknown unit → None" )

        assert units_for( Dimension.WEIGHT )[ 0 ] == WeightUnit.KG
        print( "  ✓ units_for: base unit first" )

        print( "✓ conversion_tables module smoke test PASSED" )

    except Exception as e:
        print( f"✗ conversion_tables module smoke test FAILED: {e}" )
        import traceback
        traceback.print_exc()
        passed = False

    return passed


if __name__ == "__main__":
    success = quick_smoke_test()
    exit( 0 if success else 1 )
